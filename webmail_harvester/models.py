# File: webmail_harvester/models.py
"""webmail_harvester.models: строки результата и ответы действий (scrape / format)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict


class ResultRowDict(TypedDict):
    """Сериализованная строка результата."""

    website: str
    email: str


@dataclass(slots=True, frozen=True)
class ResultRow:
    """Найденный адрес; ``website`` — исходный сайт из входного списка, а не страница находки."""

    website: str
    email: str

    def to_dict(self) -> ResultRowDict:
        return {"website": self.website, "email": self.email}


@dataclass(slots=True)
class ActionResult:
    """Результат действия: либо список строк, либо текст ошибки."""

    success: bool
    results: List[ResultRow] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, rows: List[ResultRow]) -> ActionResult:
        return cls(success=True, results=rows)

    @classmethod
    def fail(cls, message: str) -> ActionResult:
        return cls(success=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {"success": True, "results": [row.to_dict() for row in self.results]}
