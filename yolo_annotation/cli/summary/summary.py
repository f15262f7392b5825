import logging
from collections import Counter
from dataclasses import dataclass, field
from gettext import gettext as _
from typing import Dict, List

from yolo_annotation.config import load_config
from yolo_annotation.core.annotation import AnnotationStore, ClassRegistry, ImageCatalog
from yolo_annotation.utils.misc import try_tqdm

logger = logging.getLogger(__name__)


@dataclass
class DatasetSummary:
    num_images: int = 0
    labeled: int = 0
    empty: int = 0
    unlabeled: int = 0
    boxes_per_class: Dict[str, int] = field(default_factory=dict)
    malformed_lines: List[str] = field(default_factory=list)
    unreadable_files: List[str] = field(default_factory=list)

    @property
    def num_boxes(self) -> int:
        return sum(self.boxes_per_class.values())


def summarize(
    catalog: ImageCatalog, classes: ClassRegistry, store: AnnotationStore
) -> DatasetSummary:
    """
    Count label files and boxes over a catalog.

    Images with a label file but no boxes count as ``empty``, images
    without a label file as ``unlabeled``. A label file that cannot be
    read or decoded is listed in ``unreadable_files`` and not counted.
    """
    summary = DatasetSummary(num_images=len(catalog))
    counts = Counter()

    for image_path in try_tqdm(catalog, desc=_("Reading label files...")):
        label_path = store.label_path_for(image_path)
        if not label_path.exists():
            summary.unlabeled += 1
            continue

        try:
            scanned = list(store.scan(image_path))
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {label_path}: {e}")
            summary.unreadable_files.append(str(label_path))
            continue

        records = []
        for lineno, record in scanned:
            if record is None:
                summary.malformed_lines.append(f"{label_path}:{lineno}")
                continue
            records.append(record)

        if records:
            summary.labeled += 1
        else:
            summary.empty += 1
        counts.update(classes.name_of(record.class_id) for record in records)

    summary.boxes_per_class = {name: counts.get(name, 0) for name in classes.names}
    for name, count in counts.items():
        summary.boxes_per_class.setdefault(name, count)
    return summary


def handle(args):
    cfg = load_config()
    classes = ClassRegistry.load(args.classes)
    catalog = ImageCatalog.discover(args.images, extensions=cfg.image_extensions)
    store = AnnotationStore(
        label_extension=cfg.label_extension,
        float_precision=cfg.float_precision,
    )
    summary = summarize(catalog, classes, store)

    print(
        _("{labeled}/{total} images labeled, {empty} empty, {unlabeled} without labels").format(
            labeled=summary.labeled,
            total=summary.num_images,
            empty=summary.empty,
            unlabeled=summary.unlabeled,
        )
    )
    print(_("{count} boxes").format(count=summary.num_boxes))
    for name, count in summary.boxes_per_class.items():
        print(f"  {name}: {count}")
    for location in summary.malformed_lines:
        logger.warning(_("Malformed label line at {location}").format(location=location))
    for label_path in summary.unreadable_files:
        logger.warning(_("Unreadable label file {path}").format(path=label_path))
