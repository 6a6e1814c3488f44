# webmail_harvester/report/json_report.py

"""
Генерация JSON-отчёта для Webmail Harvester.

Сериализация строк результата в файл.
"""
import json
from pathlib import Path
from typing import Iterable

from webmail_harvester.models import ResultRow


def render_json(rows: Iterable[ResultRow], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет строки результата в формате JSON по указанному пути.

    :param rows: строки (сайт, адрес)
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from webmail_harvester.report.json_report import render_json
    report_path = render_json(rows, 'reports/emails.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = [row.to_dict() for row in rows]

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
