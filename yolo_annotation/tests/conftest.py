"""
Test fixtures and utilities for annotation tests.

Provides reusable fixtures for image folders, class files and sessions.
"""

import pytest
import numpy as np
import cv2
from unittest.mock import Mock


IMAGE_NAMES = ["a.jpg", "b.png", "c.bmp"]


@pytest.fixture
def image_size():
    """(width, height) of the generated test images."""
    return (200, 100)


@pytest.fixture
def image_dir(tmp_path, image_size):
    """Folder with three real images in different formats."""
    directory = tmp_path / "images"
    directory.mkdir()
    width, height = image_size
    for name in IMAGE_NAMES:
        image = np.random.randint(0, 255, (height, width, 3), dtype=np.uint8)
        assert cv2.imwrite(str(directory / name), image)
    return directory


@pytest.fixture
def classes_file(tmp_path):
    """Classes file with a blank line in the middle."""
    path = tmp_path / "classes.txt"
    path.write_text("car\nperson\n\nbicycle\n", encoding="utf-8")
    return path


@pytest.fixture
def catalog(image_dir):
    from yolo_annotation.core.annotation import ImageCatalog

    return ImageCatalog.discover(image_dir)


@pytest.fixture
def classes(classes_file):
    from yolo_annotation.core.annotation import ClassRegistry

    return ClassRegistry.load(classes_file)


@pytest.fixture
def blank_loader(image_size):
    """Image loader that returns a black image without touching the disk."""
    width, height = image_size
    return Mock(side_effect=lambda path: np.zeros((height, width, 3), dtype=np.uint8))


@pytest.fixture
def session(catalog, classes, blank_loader):
    """Started AnnotationSession on the first of three images."""
    from yolo_annotation.core.annotation import AnnotationSession

    session = AnnotationSession(catalog, classes, image_loader=blank_loader)
    assert session.start()
    return session


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: tests that decode real images from disk"
    )
