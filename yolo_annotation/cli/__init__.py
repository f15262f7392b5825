import yolo_annotation.utils.i18n  # noqa: F401

"""CLI interface for yolo_annotation project.

Subcommands are discovered from the packages next to this file. Each one
exposes ``COMMAND_DESCRIPTION`` and ``command(subparser)``, the latter
returning the handler to run.
"""

import logging
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from gettext import gettext as _
from pathlib import Path

from yolo_annotation.core.annotation.errors import StartupError
from yolo_annotation.utils.misc import load_module

logger = logging.getLogger(__name__)


def add_subcommand(subparsers, name: str, submodule):
    subparser = subparsers.add_parser(name, help=submodule.COMMAND_DESCRIPTION)
    common_flags(subparser)
    handler = submodule.command(subparser)
    subparser.set_defaults(fn=handler)


def common_flags(parser):
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=_("Give more details about what is happening"),
    )  # noqa: E501
    parser.add_argument(
        "-V",
        "--version",
        dest="is_show_version",
        action="store_true",
        help=_("Print version and exit"),
    )  # noqa: E501


def get_version() -> str:
    return (Path(__file__).parent.parent / "VERSION").read_text().strip()


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="yolo_annotation", formatter_class=ArgumentDefaultsHelpFormatter
    )
    common_flags(parser)
    subparsers = parser.add_subparsers()

    for module in sorted(Path(__file__).parent.glob("*/__init__.py")):
        if str(module).find("pycache") > 0:
            continue
        module_name = module.parent.name
        subcommand_module = load_module(
            module, module_name=f"yolo_annotation.cli.{module_name}"
        )
        add_subcommand(subparsers, module_name, subcommand_module)
    return parser


def main(argv=None):
    """
    The main function executes on commands:
    `python -m yolo_annotation` and `$ yolo_annotation `.

    Startup failures (no images, unreadable directory, no classes) are
    reported and turned into a non-zero exit code.
    """
    logging.basicConfig(format="%(levelname)s:%(name)s: %(message)s")
    logging.root.setLevel(logging.INFO)
    parser = build_parser()

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)

    if args.verbose:
        logging.root.setLevel(logging.DEBUG)

    version = get_version()
    if args.is_show_version:
        print(version)
        sys.exit(0)
    logger.debug(f"{_('Starting')} yolo_annotation v{version}")

    fn = args.__dict__.get("fn")
    args.__dict__["fn"] = None
    if fn is None:
        parser.print_help()
        sys.exit(1)

    try:
        fn(args)
    except StartupError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
