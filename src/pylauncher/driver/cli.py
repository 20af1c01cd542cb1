"""Command-line grammar for `pylauncher [OPTIONS] [-c CMD | -m MODULE | FILE] [ARGS]...`."""

import argparse
from typing import List, Optional

from .. import __version__
from ..utils.config import PROGRAM_NAME


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        usage=f"{PROGRAM_NAME} [OPTIONS] [-c CMD | -m MODULE | FILE] [ARGS]...",
        description="Launch Python code: a command, a module, a script or an interactive session.",
    )
    parser.add_argument(
        "script",
        nargs=argparse.REMAINDER,
        metavar="FILE [ARGS]",
        help="program read from script file or directory",
    )
    parser.add_argument(
        "-c",
        dest="command",
        nargs=argparse.REMAINDER,
        metavar="CMD",
        help="run the given string as a program",
    )
    parser.add_argument(
        "-m",
        dest="module",
        nargs=argparse.REMAINDER,
        metavar="MODULE",
        help="run library module as script",
    )
    parser.add_argument(
        "-O",
        dest="optimize",
        action="count",
        default=0,
        help="optimize: remove assert and __debug__-dependent statements (repeatable)",
    )
    parser.add_argument(
        "-v",
        dest="verbose",
        action="count",
        default=0,
        help="give the verbosity (can be applied multiple times)",
    )
    parser.add_argument("-d", dest="debug", action="store_true", help="debug output from the launcher")
    parser.add_argument("-q", dest="quiet", action="store_true", help="be quiet at startup")
    parser.add_argument(
        "-i", dest="inspect", action="store_true", help="inspect interactively after running the script"
    )
    parser.add_argument(
        "-s", dest="no_user_site", action="store_true", help="don't add user site directory to sys.path"
    )
    parser.add_argument(
        "-S", dest="no_site", action="store_true", help="don't imply 'import site' on initialization"
    )
    parser.add_argument(
        "-B", dest="dont_write_bytecode", action="store_true", help="don't write .pyc files on import"
    )
    parser.add_argument(
        "-E",
        dest="ignore_environment",
        action="store_true",
        help="ignore environment variables PYTHON* such as PYTHONPATH",
    )
    parser.add_argument("-V", "--version", action="version", version=f"{PROGRAM_NAME} {__version__}")
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse launcher arguments; exits with status 2 on a usage error."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is not None and not args.command:
        parser.error("argument -c: expected one argument")
    if args.module is not None and not args.module:
        parser.error("argument -m: expected one argument")
    return args
