import logging
from gettext import gettext as _
from typing import Any, Dict

from easydict import EasyDict as edict

logger = logging.getLogger(__name__)

ENV_PREFIX = "YOLO_ANNOTATION_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def coerce_value(current: Any, value: Any) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if not isinstance(value, str) or current is None:
        return value
    if isinstance(current, bool):
        return value.strip().lower() in _TRUE_VALUES
    if isinstance(current, (int, float)):
        return type(current)(value)
    if isinstance(current, (list, tuple)):
        return type(current)(item.strip() for item in value.split(",") if item.strip())
    return value


def load_cfg_from_env(cfg: edict, env: Dict[str, str], prefix: str = ENV_PREFIX):
    for k, v in env.items():
        if k.startswith(prefix):
            cfgkey = k[len(prefix):].replace("__", ".").lower()
            logger.warning(
                _(
                    "Changing configuration entry from environment variable: {k}={v}"
                ).format(
                    k=cfgkey, v=v
                )  # noqa:E501
            )  # noqa: E501
            *parts, last = cfgkey.split(".")
            this_cfg = cfg
            for part in parts:
                if this_cfg.get(part) is None:
                    this_cfg[part] = edict()
                this_cfg = this_cfg[part]
            this_cfg[last] = coerce_value(this_cfg.get(last), v)
    return cfg
