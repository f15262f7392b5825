import logging
from gettext import gettext as _

from yolo_annotation.config import load_config
from yolo_annotation.core.annotation import (
    AnnotationSession,
    AnnotationStore,
    ClassRegistry,
    ImageCatalog,
)

logger = logging.getLogger(__name__)


def build_session(args, cfg=None) -> AnnotationSession:
    """
    Build a session from the command line arguments.

    Raises:
        StartupError: If the images or the classes cannot be loaded
    """
    if cfg is None:
        cfg = load_config()
    if getattr(args, "min_box_size", None) is not None:
        cfg.min_box_size = args.min_box_size

    classes = ClassRegistry.load(args.classes)
    catalog = ImageCatalog.discover(args.images, extensions=cfg.image_extensions)
    store = AnnotationStore(
        label_extension=cfg.label_extension,
        float_precision=cfg.float_precision,
    )
    return AnnotationSession(
        catalog,
        classes,
        store=store,
        min_box_size=cfg.min_box_size,
    )


def handle(args):
    from yolo_annotation.interfaces import OpenCVAnnotationAdapter

    cfg = load_config()
    if getattr(args, "window_name", None):
        cfg.window_name = args.window_name

    session = build_session(args, cfg)
    adapter = OpenCVAnnotationAdapter(
        session,
        window_name=cfg.window_name,
        line_thickness=cfg.line_thickness,
        font_scale=cfg.font_scale,
        banner_font_scale=cfg.banner_font_scale,
        colormap=cfg.colormap,
    )
    logger.info(
        _("Keys: n/p next/previous, c change class, d delete last box, j jump, ESC exit")
    )
    adapter.run()
    logger.info(
        _("Session finished, {count} saves").format(count=session.processed_count)
    )
