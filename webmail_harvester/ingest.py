# File: webmail_harvester/ingest.py
"""webmail_harvester.ingest: чтение списка сайтов из текстового файла или таблицы Excel."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import List, Union

from openpyxl import load_workbook

from webmail_harvester.logger import logger

__all__ = ["SPREADSHEET_SUFFIXES", "read_seed_file", "read_spreadsheet"]

SPREADSHEET_SUFFIXES = (".xlsx", ".xlsm")


def read_spreadsheet(path: Union[str, Path]) -> str:
    """Первая колонка первого листа: непустые ячейки, по одной на строку."""
    workbook = load_workbook(filename=str(path), read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        cells: List[str] = []
        for row in sheet.iter_rows(min_col=1, max_col=1, values_only=True):
            value = row[0] if row else None
            if value is None:
                continue
            text = str(value).strip()
            if text:
                cells.append(text)
    finally:
        workbook.close()
    logger.debug("Loaded %d cells from %s", len(cells), path)
    return "\n".join(cells)


def read_seed_file(path: Union[str, Path]) -> str:
    """Возвращает содержимое файла как текст со списком сайтов."""
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(p))
    if p.suffix.lower() in SPREADSHEET_SUFFIXES:
        return read_spreadsheet(p)
    return p.read_text(encoding="utf-8-sig")
