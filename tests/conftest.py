import io
import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image

from dishbook.models import Category, Dish
from dishbook.store import DishStore


def jpeg_bytes(size: tuple[int, int] = (8, 6), color: str = "red") -> bytes:
    out = io.BytesIO()
    Image.new("RGB", size, color=color).save(out, format="JPEG")
    return out.getvalue()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "dishbook.db"


@pytest.fixture
def store(db_path: Path) -> DishStore:
    return DishStore(db_path)


@pytest.fixture
def photo() -> bytes:
    return jpeg_bytes()


@pytest.fixture
def bruschetta(photo: bytes) -> Dish:
    return Dish(name="Bruschetta", photo=photo, category=Category.ANTIPASTO)


def _png_chunk(chunk_type: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", zlib.crc32(chunk_type + data))


def broken_png_bytes(size: int = 64) -> bytes:
    """A PNG whose image data continues into a chunk with an invalid type, so decoding fails mid-load."""
    rows = b"".join(b"\x00" + bytes((x * 7 + y * 13) % 256 for x in range(size * 3)) for y in range(size))
    compressed = zlib.compress(rows, 0)
    half = len(compressed) // 2
    ihdr = struct.pack(">IIBBBBB", size, size, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", compressed[:half])
        + _png_chunk(b"\xa05\xa05", compressed[half:])
        + _png_chunk(b"IEND", b"")
    )


@pytest.fixture
def broken_png(tmp_path: Path) -> Path:
    path = tmp_path / "broken.png"
    path.write_bytes(broken_png_bytes())
    return path
