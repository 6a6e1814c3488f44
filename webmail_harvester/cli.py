# === FILE: webmail_harvester/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска Webmail Harvester через командную строку.

Команды:
  scrape    Собрать адреса с сайтов из файла или --url и вывести/сохранить их
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда scrape опции:
  INPUT               .txt/.csv/.xlsx со списком сайтов или "-" для stdin
  --url, -u URL       Адрес сайта (можно несколько раз) вместо файла
  --mode depth|bfs    Режим обхода
  --depth INT         Глубина для режима depth
  --max-pages INT     Бюджет страниц для режима bfs
  --batch-size INT    Сколько сайтов обходить одновременно
  --format-emails     Почистить адреса через OpenAI
  --csv PATH          Сохранить CSV (website,email)
  --json PATH         Сохранить JSON
  --html PATH         Сохранить HTML-отчёт
  --email-only        В CSV только колонка email
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего сбора (секунд)

Пример:
  webmail-harvester scrape sites.txt --mode bfs --max-pages 30 --csv emails.csv
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from webmail_harvester import __version__
from webmail_harvester.actions import format_results
from webmail_harvester.actions import scrape as scrape_action
from webmail_harvester.config import load_config
from webmail_harvester.formatter import OpenAIEmailFormatter
from webmail_harvester.ingest import read_seed_file
from webmail_harvester.logger import init_logging
from webmail_harvester.report import render_csv, render_html, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _mode_changes(current_kind: str, mode, depth, max_pages) -> dict:
    kind = mode or current_kind
    if kind == 'depth' and max_pages is not None:
        print_error('--max-pages применим только к режиму bfs')
    if kind == 'bfs' and depth is not None:
        print_error('--depth применим только к режиму depth')
    return {'kind': mode, 'depth': depth, 'max_pages': max_pages}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Webmail Harvester, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд Webmail Harvester CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument(
    'input_path',
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option('--url', '-u', 'urls', multiple=True, help='Адрес сайта (можно несколько раз)')
@click.option('--mode', type=click.Choice(['depth', 'bfs']), default=None, help='Режим обхода')
@click.option('--depth', type=click.IntRange(min=0), default=None, help='Глубина для режима depth')
@click.option('--max-pages', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Бюджет страниц для режима bfs')
@click.option('--batch-size', 'batch_size', type=click.IntRange(min=1), default=None,
              help='Сколько сайтов обходить одновременно')
@click.option('--format-emails', 'format_emails', is_flag=True, help='Почистить адреса через OpenAI')
@click.option(
    '--csv', 'csv_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить CSV в файл'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном report.html.j2 (по умолчанию встроенный)'
)
@click.option('--email-only', 'email_only', is_flag=True, help='В CSV только колонка email')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего сбора (секунд)'
)
@click.pass_context
def scrape(ctx, input_path, urls, mode, depth, max_pages, batch_size, format_emails,
           csv_output, json_output, html_output, template_dir, email_only, pretty, scan_timeout):
    """Собрать адреса с сайтов и вывести или сохранить результат."""
    cfg = ctx.obj['config']
    try:
        cfg = cfg.with_overrides(
            batch_size=batch_size,
            mode=_mode_changes(cfg.mode.kind, mode, depth, max_pages),
        )
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')

    if urls:
        raw_text = '\n'.join(urls)
    elif input_path is None:
        print_error('Укажите файл со списком сайтов или --url')
    elif str(input_path) == '-':
        raw_text = click.get_text_stream('stdin').read()
    else:
        try:
            raw_text = read_seed_file(input_path)
        except Exception as e:
            print_error(f'Ошибка чтения {input_path}: {e}')

    try:
        if scan_timeout:
            result = asyncio.run(
                asyncio.wait_for(scrape_action(raw_text, cfg), timeout=scan_timeout)
            )
        else:
            result = asyncio.run(scrape_action(raw_text, cfg))
    except asyncio.TimeoutError:
        print_error(f'Сбор не завершён за {scan_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при сборе: {e}')

    if not result.success:
        print_error(result.error)

    if format_emails:
        formatted = format_results(result.results, OpenAIEmailFormatter(model=cfg.formatter_model))
        if not formatted.success:
            print_error(formatted.error)
        result = formatted

    rows = result.results

    # Если не сохраняем в файл — печатаем в stdout
    if not (csv_output or json_output or html_output):
        indent = 2 if pretty else None
        click.echo(json.dumps([row.to_dict() for row in rows], ensure_ascii=False, indent=indent))
        return

    if csv_output:
        try:
            click.echo(f'CSV report: {render_csv(rows, csv_output, email_only=email_only)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении CSV: {e}')

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(rows, json_output, pretty=pretty)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(rows, template_dir, html_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    click.echo(f'Emails found: {len(rows)}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
