#!/usr/bin/env python3
"""Command line helpers for clearing cashola storage.

Usage:
    cashola-clear <key> [storage_dir] [--config PATH]
    cashola-clear-all [storage_dir] [--config PATH]
    python -m cashola.cli clear|clear-all ...

Options not given on the command line come from the YAML config
(`cashola.yml` by default). Exit status is 0 on success, 1 when clearing
fails and 2 on usage errors.
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, Sequence

from cashola.core import Cashola
from cashola.errors import CasholaError
from cashola.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument('storage_dir', nargs='?', help='storage directory (default from config, else .cashola/)')
    p.add_argument('--config', help='YAML config file (default cashola.yml)')


def get_clear_parser(prog: Optional[str] = 'cashola-clear') -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog, description='Delete the stored value of one key.')
    p.add_argument('key', help='key to clear')
    _add_common(p)
    return p


def get_clear_all_parser(prog: Optional[str] = 'cashola-clear-all') -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog, description='Delete the whole storage directory.')
    _add_common(p)
    return p


def _context(args: argparse.Namespace) -> Cashola:
    configure_logging(args.config)
    ctx = Cashola()
    ctx.configure_from_file(args.config)
    ctx.configure(storage_dir=args.storage_dir)
    return ctx


def clear_main(argv: Optional[Sequence[str]] = None) -> int:
    args = get_clear_parser().parse_args(argv)
    ctx = _context(args)
    try:
        ctx.clear_sync(args.key)
    except CasholaError as e:
        logger.error('Failed to clear %s: %s', args.key, e)
        return 1
    logger.info('Cleared %s from %s', args.key, ctx.storage_dir)
    return 0


def clear_all_main(argv: Optional[Sequence[str]] = None) -> int:
    args = get_clear_all_parser().parse_args(argv)
    ctx = _context(args)
    try:
        ctx.clear_all_sync()
    except CasholaError as e:
        logger.error('Failed to clear %s: %s', ctx.storage_dir, e)
        return 1
    logger.info('Cleared %s', ctx.storage_dir)
    return 0


COMMANDS = {
    'clear': clear_main,
    'clear-all': clear_all_main,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS:
        print(f"usage: python -m cashola.cli {{{','.join(COMMANDS)}}} ...", file=sys.stderr)
        return 2
    return COMMANDS[argv[0]](argv[1:])


if __name__ == '__main__':
    sys.exit(main())
