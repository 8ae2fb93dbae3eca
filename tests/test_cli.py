"""Tests for the command-line interface."""

import pytest
import yaml

from mediascrub.__main__ import main
from mediascrub.storage import LocalObjectStore

from conftest import SOI


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "storage": {"local": {"root_dir": str(tmp_path / "store")}},
        "identity": {"identity_id": "cfg-id", "username": "cfg-user"},
    }))
    return str(path)


class TestStripCommand:

    def test_strips_to_output(self, tmp_path, config_file, jpeg_with_exif, dqt_segment, sos_and_scan):
        source = tmp_path / "photo.jpg"
        source.write_bytes(jpeg_with_exif)
        output = tmp_path / "clean.jpg"

        code = main(["--config", config_file, "strip", str(source), "-o", str(output)])

        assert code == 0
        assert output.read_bytes() == SOI + dqt_segment + sos_and_scan

    def test_default_output_name(self, tmp_path, config_file, png_with_text):
        source = tmp_path / "scan.png"
        source.write_bytes(png_with_text)

        assert main(["--config", config_file, "strip", str(source)]) == 0
        assert (tmp_path / "scan.stripped.png").exists()

    def test_missing_input(self, tmp_path, config_file):
        assert main(["--config", config_file, "strip", str(tmp_path / "nope.jpg")]) == 1


class TestUploadCommand:

    def test_upload_to_store_dir(self, tmp_path, config_file, jpeg_with_exif, capsys):
        source = tmp_path / "photo.jpg"
        source.write_bytes(jpeg_with_exif)
        store_dir = tmp_path / "objects"

        code = main([
            "--config", config_file, "upload", str(source),
            "--identity", "abc", "--user", "alice", "--store-dir", str(store_dir),
        ])

        assert code == 0
        stored = list((store_dir / "media" / "abc").glob("*.jpg"))
        assert len(stored) == 1
        key = f"media/abc/{stored[0].name}"
        assert LocalObjectStore(str(store_dir)).get(key).metadata == {"userId": "alice"}
        assert key in capsys.readouterr().out

    def test_upload_uses_config_identity(self, tmp_path, config_file, png_with_text):
        source = tmp_path / "scan.png"
        source.write_bytes(png_with_text)

        assert main(["--config", config_file, "upload", str(source)]) == 0
        assert list((tmp_path / "store" / "media" / "cfg-id").glob("*.png"))

    def test_dry_run(self, tmp_path, config_file, png_with_text):
        source = tmp_path / "scan.png"
        source.write_bytes(png_with_text)

        assert main(["--config", config_file, "upload", str(source), "--dry-run"]) == 0
        assert not (tmp_path / "store").exists()

    def test_rejected_type_gives_error_code(self, tmp_path, config_file):
        source = tmp_path / "notes.txt"
        source.write_text("hello")

        assert main(["--config", config_file, "upload", str(source)]) == 1

    def test_bad_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- not a mapping")
        source = tmp_path / "a.png"
        source.write_bytes(b"x")

        assert main(["--config", str(path), "upload", str(source)]) == 2
