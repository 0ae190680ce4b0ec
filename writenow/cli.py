# cli.py

import sys
import argparse
from typing import List, Optional

from rich.console import Console

from . import __version__
from .errors import InvalidArgument, MissingDependency, OutputPathInvalid
from .interface import Config, Interface

VERSION_TEXT = (
    f"writenow {__version__}\n"
    "Released under the MIT License."
)


class ArgumentParser(argparse.ArgumentParser):
    """argparse with usage errors mapped to exit status 1."""

    def error(self, message):
        raise InvalidArgument(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='writenow',
        description='Write now, edit later: type lines, save them on Ctrl-C.',
        add_help=False
    )
    parser.add_argument('-o', '--output',
        metavar='PATH',
        help='File to append lines to (asked for at exit if omitted)')
    parser.add_argument('-h', '--help',
        action='store_true',
        help='Show this help and exit')
    parser.add_argument('-v', '--version',
        action='store_true',
        help='Show version and licence and exit')
    parser.add_argument('--enable-logging',
        action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stderr)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    err = Console(stderr=True, highlight=False)

    try:
        args = parser.parse_args(argv)
    except InvalidArgument as e:
        err.print(f"error: {e}", style="red", markup=False, soft_wrap=True)
        parser.print_usage(sys.stderr)
        return 1

    if args.help:
        parser.print_help(sys.stdout)
        print()
        print(VERSION_TEXT)
        return 0
    if args.version:
        print(VERSION_TEXT)
        return 0

    try:
        session = Interface(
            Config(output_path=args.output),
            logging_enabled=args.enable_logging,
            log_file=args.log_file
        )
        return session.start()
    except (OutputPathInvalid, MissingDependency) as e:
        err.print(f"error: {e}", style="red", markup=False, soft_wrap=True)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
