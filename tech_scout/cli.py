# === FILE: tech_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of TechScout.

Commands:
  analyze URL   Crawl from URL, fingerprint every page and print the result as JSON
  config        Show the effective crawl options

Common options:
  --config PATH       YAML/JSON options file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

analyze options:
  --engine MODULE:ATTR     Fingerprint engine factory (required)
  --recursive/--no-recursive, --max-depth, --max-urls, --chunk-size,
  --delay MS, --max-wait MS, --debug   Override values from the config file
  --pretty                 Indent JSON output
  --scan-timeout SEC       Timeout for the whole analysis

Example:
  tech_scout analyze https://example.com --engine my_engine:Engine --recursive --max-depth 2 --pretty
"""
import asyncio
import logging
import sys
from pathlib import Path

import click

from tech_scout import __version__
from tech_scout.config import load_config, override
from tech_scout.fingerprint import load_engine
from tech_scout.logger import configure, logger
from tech_scout.scanner import start_analysis

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='TechScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON options file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """TechScout command group."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('analyze', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--engine', '-e', 'engine_spec', required=True, help='Fingerprint engine as module:attribute')
@click.option('--recursive/--no-recursive', default=None, help='Follow links on analyzed pages')
@click.option('--max-depth', type=click.IntRange(min=1), default=None, help='Maximum link depth')
@click.option('--max-urls', type=click.IntRange(min=1), default=None, help='Maximum number of URLs')
@click.option('--chunk-size', type=click.IntRange(min=1), default=None, help='Pages visited concurrently')
@click.option('--delay', type=click.IntRange(min=0), default=None, help='Pacing step between pages (ms)')
@click.option('--max-wait', type=click.IntRange(min=1), default=None, help='Per-page timeout (ms)')
@click.option('--debug/--no-debug', default=None, help='Write driver log lines')
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option('--scan-timeout', 'scan_timeout', type=float, default=None, help='Timeout for the whole analysis (seconds)')
@click.pass_context
def analyze(ctx, url, engine_spec, recursive, max_depth, max_urls, chunk_size, delay, max_wait, debug,
            pretty, scan_timeout):
    """Analyze URL and print detected applications as JSON."""
    try:
        cfg = override(
            ctx.obj['config'],
            recursive=recursive,
            max_depth=max_depth,
            max_urls=max_urls,
            chunk_size=chunk_size,
            delay=delay,
            max_wait=max_wait,
            debug=debug,
        )
    except Exception as e:
        print_error(f'Invalid options: {e}')
    if cfg.debug:
        logger.setLevel(logging.DEBUG)

    try:
        engine = load_engine(engine_spec)
    except Exception as e:
        print_error(f'Failed to load engine {engine_spec}: {e}')

    try:
        if scan_timeout:
            result = asyncio.run(
                asyncio.wait_for(start_analysis(url, cfg, engine), timeout=scan_timeout)
            )
        else:
            result = asyncio.run(start_analysis(url, cfg, engine))
    except asyncio.TimeoutError:
        print_error(f'Analysis did not finish within {scan_timeout} seconds')
    except Exception as e:
        print_error(f'Analysis failed: {e}')

    click.echo(result.json(pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective crawl options as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
