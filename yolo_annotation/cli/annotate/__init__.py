# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Interactively draw bounding boxes over a folder of images")


def command(subparser):
    subparser.add_argument(
        "images", type=Path, help=_("Folder with the images to annotate")
    )
    subparser.add_argument(
        "classes", type=Path, help=_("Text file with one class name per line")
    )
    subparser.add_argument(
        "-w",
        "--window-name",
        dest="window_name",
        type=str,
        help=_("Title of the annotation window"),
    )
    subparser.add_argument(
        "--min-box-size",
        dest="min_box_size",
        type=int,
        help=_("Boxes must be wider and taller than this many pixels"),
    )

    def handle(args):
        from .annotator import handle as annotator_handle

        annotator_handle(args)

    return handle
