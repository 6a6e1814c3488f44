# webmail_harvester/report/csv_report.py

"""
Выгрузка результатов в CSV.

Заголовок ``website,email`` (или только ``email``). Значения с запятыми и
кавычками экранируются модулем csv, поэтому файл корректно читается обратно.
"""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List

from webmail_harvester.models import ResultRow


def _header_and_rows(rows: Iterable[ResultRow], email_only: bool) -> List[List[str]]:
    if email_only:
        return [["email"]] + [[row.email] for row in rows]
    return [["website", "email"]] + [[row.website, row.email] for row in rows]


def rows_to_csv(rows: Iterable[ResultRow], *, email_only: bool = False) -> str:
    """Возвращает CSV-текст с заголовком и строками ``\\n``."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(_header_and_rows(rows, email_only))
    return buffer.getvalue()


def render_csv(rows: Iterable[ResultRow], output_path: Path | str, *, email_only: bool = False) -> Path:
    """
    Сохраняет строки результата в CSV по указанному пути.

    :param rows: строки (сайт, адрес)
    :param output_path: путь к CSV-файлу
    :param email_only: писать только колонку ``email``
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rows_to_csv(rows, email_only=email_only), encoding="utf-8")
    return output
