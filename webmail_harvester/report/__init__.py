# File: webmail_harvester/report/__init__.py
"""webmail_harvester.report: выгрузка найденных адресов в CSV, JSON и HTML."""

from __future__ import annotations

from .csv_report import render_csv, rows_to_csv
from .html_report import render_html
from .json_report import render_json

__all__ = ["render_csv", "rows_to_csv", "render_json", "render_html"]
