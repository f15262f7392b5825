import importlib.util
from pathlib import Path
from typing import Iterable, Optional

from tqdm import tqdm


def load_module(script_path: Path, module_name: Optional[str] = None):
    """Import a python file as a module."""
    script_path = Path(script_path)
    if module_name is None:
        module_name = script_path.stem
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def try_tqdm(iterable: Iterable, **kwargs):
    """Wrap an iterable in a progress bar when writing to a terminal."""
    kwargs.setdefault("disable", None)
    return tqdm(iterable, **kwargs)
