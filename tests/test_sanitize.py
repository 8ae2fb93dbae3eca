"""Tests for JPEG/PNG metadata stripping."""

import io
import struct
from unittest.mock import patch

from PIL import Image

from mediascrub.sanitize import (
    ByteCursor,
    StripOutcome,
    sanitize,
    strip_jpeg,
    strip_metadata,
    strip_png,
)

from conftest import EOI, PNG_SIGNATURE, SOI, jpeg_segment, png_chunk, png_chunk_types


class TestByteCursor:
    """Tests for bounds-checked reads"""

    def test_reads_big_endian(self):
        cursor = ByteCursor(b"\x01\x02\x03\x04\x05")
        assert cursor.read_u16_be(0) == 0x0102
        assert cursor.read_u32_be(1) == 0x02030405

    def test_out_of_bounds_reads_return_none(self):
        cursor = ByteCursor(b"\x01\x02\x03")
        assert cursor.read_u16_be(2) is None
        assert cursor.read_u32_be(0) is None
        assert cursor.read_bytes(1, 5) is None
        assert cursor.read_u16_be(-1) is None

    def test_remainder_past_end_is_empty(self):
        cursor = ByteCursor(b"abc")
        assert cursor.remainder(1) == b"bc"
        assert cursor.remainder(10) == b""


class TestStripJpeg:
    """Tests for APP1 removal"""

    def test_removes_app1_and_keeps_everything_else(
        self, jpeg_with_exif, dqt_segment, sos_and_scan
    ):
        result = strip_metadata(jpeg_with_exif, "image/jpeg")

        assert result == SOI + dqt_segment + sos_and_scan
        assert len(result) < len(jpeg_with_exif)

    def test_removes_every_app1_segment(self, app1_segment, dqt_segment, sos_and_scan):
        app0 = jpeg_segment(0xFFE0, b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00")
        xmp = jpeg_segment(0xFFE1, b"http://ns.adobe.com/xap/1.0/\x00<x:xmpmeta/>")
        data = SOI + app0 + app1_segment + dqt_segment + xmp + sos_and_scan

        outcome = sanitize(data)

        assert outcome.changed
        assert outcome.removed == 2
        assert outcome.data == SOI + app0 + dqt_segment + sos_and_scan

    def test_jpeg_without_app1_is_reproduced_exactly(self, dqt_segment, sos_and_scan):
        data = SOI + dqt_segment + sos_and_scan
        assert strip_metadata(data) == data

    def test_soi_only(self):
        assert strip_metadata(SOI) == SOI

    def test_stops_at_first_non_marker_byte(self, dqt_segment):
        # Bytes after the first non-FF high byte are copied verbatim, even
        # if they look like an APP1 marker.
        tail = b"\x00\x11" + jpeg_segment(0xFFE1, b"not parsed")
        data = SOI + dqt_segment + tail
        assert strip_metadata(data) == data

    def test_app1_length_past_end_returns_original(self, dqt_segment):
        data = SOI + dqt_segment + b"\xff\xe1\x10\x00Exif"
        outcome = strip_jpeg(ByteCursor(data))

        assert not outcome.changed
        assert "overruns" in outcome.reason
        assert strip_metadata(data) is data

    def test_segment_length_past_end_returns_original(self):
        data = SOI + b"\xff\xdb\x00\x43" + bytes(10)
        assert strip_metadata(data) is data

    def test_length_below_two_returns_original(self):
        data = SOI + b"\xff\xdb\x00\x01" + bytes(4)
        assert strip_metadata(data) is data

    def test_truncated_marker_returns_original(self, dqt_segment):
        data = SOI + dqt_segment + b"\xff"
        assert strip_metadata(data) is data

    def test_truncated_length_field_returns_original(self):
        data = SOI + b"\xff\xe1\x00"
        assert strip_metadata(data) is data

    def test_real_jpeg_loses_exif_and_still_decodes(self, pillow_jpeg_with_exif):
        with Image.open(io.BytesIO(pillow_jpeg_with_exif)) as original:
            assert len(original.getexif()) > 0

        result = strip_metadata(pillow_jpeg_with_exif, "image/jpeg")

        assert b"ExampleCam" not in result
        assert len(result) < len(pillow_jpeg_with_exif)
        with Image.open(io.BytesIO(result)) as cleaned:
            cleaned.load()
            assert cleaned.format == "JPEG"
            assert cleaned.size == (16, 16)
            assert len(cleaned.getexif()) == 0


class TestStripPng:
    """Tests for ancillary chunk removal"""

    def test_keeps_only_essential_chunks(self, png_with_text):
        result = strip_metadata(png_with_text, "image/png")

        assert png_chunk_types(result) == [b"IHDR", b"IDAT", b"IEND"]
        assert len(result) < len(png_with_text)

    def test_kept_chunks_are_byte_identical(self, ihdr_chunk):
        idat = png_chunk(b"IDAT", b"\x78\x9c\x63\x00\x00")
        iend = png_chunk(b"IEND", b"")
        data = (
            PNG_SIGNATURE + ihdr_chunk + png_chunk(b"gAMA", b"\x00\x00\xb1\x8f")
            + idat + png_chunk(b"eXIf", b"MM\x00*") + iend
        )

        assert strip_metadata(data) == PNG_SIGNATURE + ihdr_chunk + idat + iend

    def test_palette_is_kept(self, ihdr_chunk):
        plte = png_chunk(b"PLTE", b"\x00\x00\x00\xff\xff\xff")
        idat = png_chunk(b"IDAT", b"\x00")
        iend = png_chunk(b"IEND", b"")
        data = PNG_SIGNATURE + ihdr_chunk + plte + png_chunk(b"tRNS", b"\x00") + idat + iend

        result = strip_metadata(data)

        assert png_chunk_types(result) == [b"IHDR", b"PLTE", b"IDAT", b"IEND"]

    def test_signature_only(self):
        assert strip_metadata(PNG_SIGNATURE) == PNG_SIGNATURE

    def test_chunk_length_past_end_returns_original(self, ihdr_chunk):
        data = PNG_SIGNATURE + ihdr_chunk + struct.pack(">I", 5000) + b"tEXtshort"
        outcome = strip_png(ByteCursor(data))

        assert not outcome.changed
        assert strip_metadata(data) is data

    def test_truncated_chunk_header_returns_original(self, ihdr_chunk):
        data = PNG_SIGNATURE + ihdr_chunk + b"\x00\x00\x00"
        assert strip_metadata(data) is data

    def test_real_png_loses_text_and_still_decodes(self, pillow_png_with_text):
        with Image.open(io.BytesIO(pillow_png_with_text)) as original:
            assert original.text

        result = strip_metadata(pillow_png_with_text, "image/png")

        assert set(png_chunk_types(result)) <= {b"IHDR", b"PLTE", b"IDAT", b"IEND"}
        assert b"Jane Doe" not in result
        with Image.open(io.BytesIO(result)) as cleaned:
            cleaned.load()
            assert cleaned.size == (4, 4)
            assert cleaned.mode == "P"
            assert not cleaned.text


class TestDispatch:
    """Tests for format detection and pass-through"""

    def test_unrecognized_format_is_identical(self):
        data = b"plain text"
        assert strip_metadata(data, "text/plain") is data

    def test_gif_passes_through(self):
        data = b"GIF89a" + bytes(20)
        assert strip_metadata(data, "image/gif") == data

    def test_empty_input(self):
        assert strip_metadata(b"") == b""

    def test_declared_type_is_advisory(self, jpeg_with_exif, dqt_segment, sos_and_scan):
        result = strip_metadata(jpeg_with_exif, "image/png")
        assert result == SOI + dqt_segment + sos_and_scan

    def test_partial_png_signature_is_not_png(self):
        data = b"\x89PNG\x00\x00\x00\x00" + bytes(12)
        assert sanitize(data).format is None

    def test_oversized_input_is_skipped(self, jpeg_with_exif):
        outcome = sanitize(jpeg_with_exif, max_bytes=10)
        assert not outcome.changed
        assert strip_metadata(jpeg_with_exif, max_bytes=10) is jpeg_with_exif

    def test_zero_limit_disables_size_check(self, jpeg_with_exif):
        assert sanitize(jpeg_with_exif, max_bytes=0).changed

    def test_unexpected_error_returns_original(self, jpeg_with_exif):
        with patch("mediascrub.sanitize.stripper.strip_jpeg", side_effect=RuntimeError("boom")):
            assert strip_metadata(jpeg_with_exif) is jpeg_with_exif

    def test_input_buffer_is_not_modified(self, jpeg_with_exif):
        data = bytearray(jpeg_with_exif)
        snapshot = bytes(data)
        strip_metadata(data)
        assert bytes(data) == snapshot


class TestStripOutcome:
    """Tests for outcome resolution"""

    def test_resolve_unchanged_returns_original(self):
        original = b"abc"
        assert StripOutcome.unchanged(None, "why").resolve(original) is original

    def test_resolve_sanitized_returns_new_data(self):
        assert StripOutcome.sanitized("png", b"new").resolve(b"old") == b"new"
