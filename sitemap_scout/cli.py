# === FILE: sitemap_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа SitemapScout для командной строки.

Команды:
  preview   Найти URL в sitemap и показать количество и выборку
  crawl     Найти URL и обойти их (или отправить во внешнюю очередь)
  consume   Обойти пачку URL из файла (как потребитель очереди)
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию SitemapScout

Пример:
  sitemap_scout crawl --domain example.com --max-urls 20 --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from sitemap_scout import __version__
from sitemap_scout.config import load_config
from sitemap_scout.engine import consume_batch, preview, run_crawl
from sitemap_scout.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def echo_json(data, pretty: bool) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2 if pretty else None))


def read_url_lines(stream) -> list:
    """Один URL на строку; пустые строки и комментарии (#) пропускаются."""
    urls = []
    for line in stream:
        line = line.strip()
        if line and not line.startswith('#'):
            urls.append(line)
    return urls


sitemap_option = click.option(
    '--sitemap', '-s', 'sitemap', default=None, help='URL sitemap.xml (или .xml.gz)'
)
domain_option = click.option(
    '--domain', '-d', 'domain', default=None, help='Домен: будет использован https://<domain>/sitemap.xml'
)
pretty_option = click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
concurrency_option = click.option(
    '--concurrency', 'concurrency', type=click.IntRange(min=1), default=None,
    help='Максимум одновременных запросов (override max_concurrency)'
)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapScout, version %(version)s')
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SitemapScout CLI."""
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


@cli.command('preview', context_settings=CONTEXT_SETTINGS)
@sitemap_option
@domain_option
@click.option('--limit', '-l', 'limit', type=click.IntRange(min=0), default=None,
              help='Размер выборки (override preview_limit)')
@pretty_option
@click.pass_context
def preview_cmd(ctx, sitemap, domain, limit, pretty):
    """Показать, сколько URL найдено в sitemap, и первые из них."""
    cfg = ctx.obj['config']
    try:
        summary = asyncio.run(preview(cfg, sitemap=sitemap, domain=domain, limit=limit))
    except Exception as e:
        print_error(f'Ошибка при чтении sitemap: {e}')
    echo_json(summary.to_dict(), pretty)


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@sitemap_option
@domain_option
@click.option('--max-urls', '-m', 'max_urls', type=click.IntRange(min=0), default=None,
              help='Сколько URL обойти за запуск (override max_urls_per_run)')
@concurrency_option
@pretty_option
@click.pass_context
def crawl_cmd(ctx, sitemap, domain, max_urls, concurrency, pretty):
    """Найти URL в sitemap и обойти их или отправить в очередь."""
    cfg = ctx.obj['config']
    try:
        summary = asyncio.run(
            run_crawl(cfg, sitemap=sitemap, domain=domain, max_urls=max_urls, concurrency=concurrency)
        )
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')
    echo_json(summary.to_dict(), pretty)


@cli.command('consume', context_settings=CONTEXT_SETTINGS)
@click.argument('url_file', type=click.File('r', encoding='utf-8'))
@concurrency_option
@pretty_option
@click.pass_context
def consume_cmd(ctx, url_file, concurrency, pretty):
    """Обойти пачку URL из файла (один на строку, '-' для stdin)."""
    cfg = ctx.obj['config']
    urls = read_url_lines(url_file)
    try:
        results = asyncio.run(consume_batch(cfg, urls, concurrency=concurrency))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')
    echo_json([r.to_dict() for r in results], pretty)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
