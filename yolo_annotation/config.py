"""
Configuration defaults.

Every entry can be overridden from the environment with
``YOLO_ANNOTATION_<KEY>``, e.g. ``YOLO_ANNOTATION_MIN_BOX_SIZE=10``.
"""

import os
from typing import Dict, Optional

from easydict import EasyDict as edict

from yolo_annotation.utils.env import load_cfg_from_env

DEFAULT_CONFIG = dict(
    # label files
    label_extension=".txt",
    float_precision=6,
    # catalog
    image_extensions=[".jpg", ".jpeg", ".png", ".bmp"],
    # drawing
    min_box_size=5,
    # display
    window_name="YOLO Annotator",
    line_thickness=2,
    font_scale=0.5,
    banner_font_scale=0.75,
    colormap="tab10",
)


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Defaults with environment overrides applied."""
    if env is None:
        env = dict(os.environ)
    cfg = edict(DEFAULT_CONFIG)
    return load_cfg_from_env(cfg, env)
