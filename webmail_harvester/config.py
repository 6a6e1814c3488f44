# === FILE: webmail_harvester/config.py ===
"""
Модуль для загрузки и валидации конфигурации Webmail Harvester.
Используется Pydantic для описания схемы и проверки данных.

Режим обхода задаётся одним полем ``mode`` (дискриминатор ``kind``):

* ``depth`` — рекурсивный обход по ключевым словам с ограничением глубины;
* ``bfs``   — обход в ширину всего сайта с бюджетом страниц и паузой.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Annotated, Any, Literal, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "DEFAULT_KEYWORDS",
    "DEFAULT_USER_AGENT",
    "BreadthFirstMode",
    "CrawlMode",
    "DepthBoundedMode",
    "HarvestConfig",
    "load_config",
]

DEFAULT_KEYWORDS: Tuple[str, ...] = ("contact", "about", "support", "team", "info")
DEFAULT_USER_AGENT = "WebmailHarvester/1.0 (+https://github.com/webmail-harvester)"


class DepthBoundedMode(BaseModel):
    """Рекурсивный обход: только ссылки, релевантные ключевым словам, до глубины ``depth``."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["depth"] = "depth"
    depth: int = Field(1, ge=0, description="Сколько переходов от стартовой страницы.")
    keywords: Tuple[str, ...] = Field(DEFAULT_KEYWORDS, description="Ключевые слова для отбора ссылок.")
    timeout: float = Field(5.0, gt=0, description="Таймаут на один запрос (секунд).")

    @field_validator("keywords")
    def _normalize_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        cleaned = tuple(k.strip().lower() for k in v if k and k.strip())
        if not cleaned:
            raise ValueError("keywords must contain at least one non-empty entry")
        return cleaned


class BreadthFirstMode(BaseModel):
    """Обход в ширину всего сайта, ограниченный числом страниц."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["bfs"] = "bfs"
    max_pages: int = Field(50, ge=1, description="Жесткий лимит по числу страниц на один сайт.")
    delay: float = Field(0.2, ge=0, description="Пауза между страницами (секунд).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")


CrawlMode = Annotated[Union[DepthBoundedMode, BreadthFirstMode], Field(discriminator="kind")]


class HarvestConfig(BaseModel):
    """Конфигурация для одного запуска сбора адресов."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    batch_size: int = Field(10, ge=1, description="Сколько сайтов обходить одновременно.")
    max_concurrent_fetches: int = Field(
        10, ge=1, description="Лимит одновременных запросов внутри одного сайта."
    )
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429.")
    mode: CrawlMode = Field(default_factory=DepthBoundedMode, description="Режим обхода.")
    formatter_model: str = Field("gpt-4o-mini", min_length=1, description="Модель для чистки адресов.")

    @property
    def timeout(self) -> float:
        """Таймаут одного запроса для выбранного режима."""
        return self.mode.timeout

    def with_overrides(self, **changes: Any) -> HarvestConfig:
        """
        Возвращает новую проверенную конфигурацию с заменёнными полями.
        Значения ``None`` игнорируются; ``mode`` принимает словарь и
        сливается с текущим режимом, если ``kind`` не меняется.
        """
        data = self.model_dump()
        mode_changes = {k: v for k, v in (changes.pop("mode", None) or {}).items() if v is not None}
        data.update({k: v for k, v in changes.items() if v is not None})
        if mode_changes:
            kind = mode_changes.get("kind", data["mode"]["kind"])
            base = data["mode"] if kind == data["mode"]["kind"] else {"kind": kind}
            data["mode"] = {**base, **mode_changes}
        return HarvestConfig.model_validate(data)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> HarvestConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект HarvestConfig.
    Без пути пробует ``configs/default.yaml``, иначе берёт значения по умолчанию.
    Явно указанный, но отсутствующий файл — FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return HarvestConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return HarvestConfig(**data)
