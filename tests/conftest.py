"""Shared fixtures: hand-built JPEG/PNG payloads and a test config."""

import io
import struct
import zlib

import pytest
from PIL import Image, PngImagePlugin

from mediascrub.config import ConfigManager

SOI = b"\xff\xd8"
EOI = b"\xff\xd9"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

FIXED_TIMESTAMP = 1700000000000


def jpeg_segment(marker: int, payload: bytes) -> bytes:
    """Marker + big-endian length (counting itself) + payload."""
    return struct.pack(">HH", marker, len(payload) + 2) + payload


def png_chunk(chunk_type: bytes, data: bytes) -> bytes:
    """Length + type + data + CRC."""
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def png_chunk_types(data: bytes) -> list:
    """Walk a well-formed PNG and list its chunk types."""
    types = []
    offset = len(PNG_SIGNATURE)
    while offset < len(data):
        length = struct.unpack(">I", data[offset:offset + 4])[0]
        types.append(data[offset + 4:offset + 8])
        offset += 12 + length
    return types


@pytest.fixture
def app1_segment():
    # 50 bytes in total: marker (2) + length (2) + 46 bytes of EXIF payload
    return jpeg_segment(0xFFE1, b"Exif\x00\x00" + b"\x4d" * 40)


@pytest.fixture
def dqt_segment():
    return jpeg_segment(0xFFDB, b"\x00" + bytes(range(64)))


@pytest.fixture
def sos_and_scan():
    header = jpeg_segment(0xFFDA, b"\x01\x01\x00\x00\x3f\x00")
    scan = b"\x12\x34\x56\x78\xff\x00\x9a\xbc"
    return header + scan + EOI


@pytest.fixture
def jpeg_with_exif(app1_segment, dqt_segment, sos_and_scan):
    return SOI + app1_segment + dqt_segment + sos_and_scan


@pytest.fixture
def ihdr_chunk():
    return png_chunk(b"IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0))


@pytest.fixture
def png_with_text(ihdr_chunk):
    return (
        PNG_SIGNATURE
        + ihdr_chunk
        + png_chunk(b"tEXt", b"Author\x00Jane Doe")
        + png_chunk(b"IDAT", zlib.compress(b"\x00\xff\x00\x00"))
        + png_chunk(b"tIME", b"\x07\xe8\x01\x02\x03\x04\x05")
        + png_chunk(b"IEND", b"")
    )


@pytest.fixture
def pillow_jpeg_with_exif():
    """A real JPEG carrying EXIF (black image, so scan data starts below 0xFF)."""
    exif = Image.Exif()
    exif[0x010F] = "ExampleCam"
    exif[0x0110] = "Model X"
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), (0, 0, 0)).save(buf, format="JPEG", exif=exif.tobytes())
    return buf.getvalue()


@pytest.fixture
def pillow_png_with_text():
    """A real palette PNG with text metadata."""
    info = PngImagePlugin.PngInfo()
    info.add_text("Author", "Jane Doe")
    info.add_text("Comment", "taken at home")
    buf = io.BytesIO()
    Image.new("P", (4, 4), 1).save(buf, format="PNG", pnginfo=info)
    return buf.getvalue()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def fixed_random():
    return lambda: "abc"


@pytest.fixture
def config(tmp_path):
    return ConfigManager.from_dict({
        "storage": {"backend": "local", "local": {"root_dir": str(tmp_path / "store")}},
        "identity": {"identity_id": "eu-west-1:abc", "username": "alice"},
    })
