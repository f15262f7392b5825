from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Report annotation progress of a folder of images")


def command(subparser):
    subparser.add_argument(
        "images", type=Path, help=_("Folder with the annotated images")
    )
    subparser.add_argument(
        "classes", type=Path, help=_("Text file with one class name per line")
    )

    def handle(args):
        from .summary import handle as summary_handle

        summary_handle(args)

    return handle
