import numpy as np
import cv2
import pytest
from unittest.mock import patch

from yolo_annotation.cli import build_parser, get_version, main


@pytest.fixture
def classes_file(tmp_path):
    path = tmp_path / "classes.txt"
    path.write_text("car\nperson\n")
    return path


@pytest.fixture
def image_dir(tmp_path):
    directory = tmp_path / "images"
    directory.mkdir()
    for name in ["a.jpg", "b.jpg"]:
        cv2.imwrite(str(directory / name), np.zeros((40, 60, 3), np.uint8))
    return directory


def test_subcommands_are_discovered():
    parser = build_parser()
    args = parser.parse_args(["annotate", "imgs", "classes.txt"])
    assert args.fn is not None
    args = parser.parse_args(["summary", "imgs", "classes.txt"])
    assert args.fn is not None


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-V"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == get_version()


def test_no_subcommand_fails():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code != 0


def test_missing_directory_exit_code(tmp_path, classes_file, caplog):
    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(tmp_path / "missing"), str(classes_file)])
    assert excinfo.value.code == 3
    assert "unreadable" in caplog.text


def test_empty_directory_exit_code(tmp_path, classes_file, caplog):
    empty = tmp_path / "empty"
    empty.mkdir()
    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(empty), str(classes_file)])
    assert excinfo.value.code == 2
    assert "No images found" in caplog.text


def test_empty_classes_exit_code(tmp_path, image_dir, caplog):
    classes_file = tmp_path / "empty.txt"
    classes_file.write_text("\n\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(image_dir), str(classes_file)])
    assert excinfo.value.code == 4
    assert "No classes loaded" in caplog.text


def test_annotate_runs_adapter(image_dir, classes_file):
    with patch("yolo_annotation.interfaces.OpenCVAnnotationAdapter.run") as run:
        main(["annotate", str(image_dir), str(classes_file), "--min-box-size", "8"])
    run.assert_called_once()


def test_build_session_applies_flags(image_dir, classes_file, monkeypatch):
    from argparse import Namespace

    from yolo_annotation.cli.annotate.annotator import build_session

    monkeypatch.setenv("YOLO_ANNOTATION_LABEL_EXTENSION", ".label")
    args = Namespace(images=image_dir, classes=classes_file, min_box_size=12)
    session = build_session(args)

    assert session.min_box_size == 12
    assert len(session.catalog) == 2
    assert session.classes.names == ["car", "person"]
    assert session.store.label_extension == ".label"


def test_summary_command(image_dir, classes_file, capsys):
    (image_dir / "a.txt").write_text("1 0.5 0.5 0.2 0.2\n")

    main(["summary", str(image_dir), str(classes_file)])

    out = capsys.readouterr().out
    assert "1/2 images labeled" in out
    assert "person: 1" in out
    assert "car: 0" in out


def test_summary_command_survives_undecodable_label_file(image_dir, classes_file, capsys):
    (image_dir / "a.txt").write_bytes(b"\xff\xfe\x00garbage")

    main(["summary", str(image_dir), str(classes_file)])

    assert "0/2 images labeled" in capsys.readouterr().out
