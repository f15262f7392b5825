"""
Tests for ImageCatalog and ClassRegistry.
"""

import os

import pytest

from yolo_annotation.core.annotation import (
    ClassFileUnreadable,
    ClassRegistry,
    DirectoryUnreadable,
    EmptyCatalog,
    EmptyClassList,
    ImageCatalog,
    ImageDecodeFailure,
    read_image,
)


class TestImageCatalog:
    def test_discover_sorted(self, tmp_path):
        for name in ["b.png", "a.jpg", "c.JPEG", "notes.txt", "a.txt"]:
            (tmp_path / name).write_bytes(b"")

        catalog = ImageCatalog.discover(tmp_path)

        assert [p.name for p in catalog] == ["a.jpg", "b.png", "c.JPEG"]
        assert len(catalog) == 3
        assert catalog[0] == tmp_path / "a.jpg"

    def test_discover_extension_is_case_insensitive(self, tmp_path):
        for name in ["X.BMP", "y.Png", "z.JpG"]:
            (tmp_path / name).write_bytes(b"")

        assert len(ImageCatalog.discover(tmp_path)) == 3

    def test_discover_is_not_recursive(self, tmp_path):
        (tmp_path / "top.jpg").write_bytes(b"")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "deep.jpg").write_bytes(b"")
        (tmp_path / "folder.jpg").mkdir()

        assert [p.name for p in ImageCatalog.discover(tmp_path)] == ["top.jpg"]

    def test_discover_custom_extensions(self, tmp_path):
        (tmp_path / "a.jpg").write_bytes(b"")
        (tmp_path / "b.tif").write_bytes(b"")

        catalog = ImageCatalog.discover(tmp_path, extensions=[".TIF"])

        assert [p.name for p in catalog] == ["b.tif"]

    def test_empty_catalog(self, tmp_path):
        (tmp_path / "readme.md").write_text("nothing here")

        with pytest.raises(EmptyCatalog) as excinfo:
            ImageCatalog.discover(tmp_path)
        assert excinfo.value.exit_code == 2

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryUnreadable) as excinfo:
            ImageCatalog.discover(tmp_path / "nope")
        assert excinfo.value.exit_code == 3

    def test_file_instead_of_directory(self, tmp_path):
        path = tmp_path / "image.jpg"
        path.write_bytes(b"")

        with pytest.raises(DirectoryUnreadable):
            ImageCatalog.discover(path)

    def test_catalog_deduplicates(self, tmp_path):
        catalog = ImageCatalog([tmp_path / "b.jpg", tmp_path / "a.jpg", tmp_path / "b.jpg"])

        assert list(catalog) == [tmp_path / "a.jpg", tmp_path / "b.jpg"]


class TestReadImage:
    def test_read_image(self, image_dir, image_size):
        image = read_image(image_dir / "a.jpg")

        assert image.shape == (image_size[1], image_size[0], 3)

    def test_read_corrupt_image(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"definitely not a jpeg")

        with pytest.raises(ImageDecodeFailure) as excinfo:
            read_image(path)
        assert excinfo.value.image_path == path


class TestClassRegistry:
    def test_load_skips_blank_lines(self, classes_file):
        registry = ClassRegistry.load(classes_file)

        assert registry.names == ["car", "person", "bicycle"]
        assert len(registry) == 3

    def test_load_strips_windows_line_endings(self, tmp_path):
        path = tmp_path / "classes.txt"
        path.write_bytes(b"cat\r\ndog\r\n")

        assert ClassRegistry.load(path).names == ["cat", "dog"]

    def test_load_keeps_spaces_in_names(self, tmp_path):
        path = tmp_path / "classes.txt"
        path.write_text("traffic light\n  \n stop sign \n", encoding="utf-8")

        assert ClassRegistry.load(path).names == ["traffic light", " stop sign "]

    def test_empty_class_list(self, tmp_path):
        path = tmp_path / "classes.txt"
        path.write_text("\n  \n\n")

        with pytest.raises(EmptyClassList) as excinfo:
            ClassRegistry.load(path)
        assert excinfo.value.exit_code == 4

    def test_missing_classes_file(self, tmp_path):
        with pytest.raises(ClassFileUnreadable):
            ClassRegistry.load(tmp_path / "missing.txt")

    def test_advance_wraps(self, classes):
        class_id = 0
        seen = []
        for _ in range(3):
            class_id = classes.advance(class_id)
            seen.append(class_id)

        assert seen == [1, 2, 0]

    def test_single_class_advance(self):
        assert ClassRegistry(["only"]).advance(0) == 0

    def test_name_of(self, classes):
        assert classes.name_of(1) == "person"
        assert classes.name_of(7) == "7"
        assert classes.name_of(-1) == "-1"

    def test_registry_requires_names(self):
        with pytest.raises(ValueError):
            ClassRegistry([])


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permissions are not enforced for root",
)
def test_unreadable_directory(tmp_path):
    directory = tmp_path / "locked"
    directory.mkdir()
    (directory / "a.jpg").write_bytes(b"")
    directory.chmod(0)
    try:
        with pytest.raises(DirectoryUnreadable):
            ImageCatalog.discover(directory)
    finally:
        directory.chmod(0o755)
