import struct

import numpy as np
import pytest
from PIL import Image

from paperbak.bmp import PIXEL_OFFSET, bitmap_path, bmp_headers, write_bmp
from paperbak.errors import BitmapWriteError, PaperbakError


@pytest.mark.parametrize("outbmp, page, npages, expected", [
    ("out.bmp", 0, 1, "out.bmp"),
    ("out", 0, 1, "out.bmp"),
    ("out.bmp", 0, 2, "out_0001.bmp"),
    ("out.bmp", 11, 12, "out_0012.bmp"),
    ("dir/scan.BMP", 2, 3, "dir/scan_0003.BMP"),
])
def test_bitmap_path(outbmp, page, npages, expected):
    assert bitmap_path(outbmp, page, npages) == expected


def test_headers():
    headers = bmp_headers(8, 3, 300, 600)
    assert len(headers) == PIXEL_OFFSET == 1078
    assert headers[:2] == b"BM"
    size, _, offset = struct.unpack_from("<IIi", headers, 2)
    assert size == 1078 + 24 and offset == 1078
    (info_size, width, height, planes, bits, compression, _,
     xppm, yppm, used, important) = struct.unpack_from("<IiiHHIIiiII", headers, 14)
    assert (info_size, width, height, planes, bits, compression) == (40, 8, 3, 1, 8, 0)
    assert (xppm, yppm) == (11811, 23622)
    assert used == important == 256
    # Palette entry 64 is mid-gray
    assert headers[54 + 64 * 4:54 + 65 * 4] == bytes((64, 64, 64, 0))


def test_write_bmp_round_trips_through_pillow(tmp_path):
    pixels = np.full((5, 12), 255, dtype=np.uint8)
    pixels[0, :] = 0         # bottom scanline
    pixels[4, 3] = 64
    path = write_bmp(str(tmp_path / "a.bmp"), pixels, 300, 300)
    data = (tmp_path / "a.bmp").read_bytes()
    assert len(data) == 1078 + 60
    with Image.open(path) as image:
        assert image.size == (12, 5)
        gray = np.asarray(image.convert("L"))
    assert np.array_equal(gray, pixels[::-1])
    assert gray[4, 0] == 0 and gray[0, 3] == 64


def test_width_must_be_aligned(tmp_path):
    with pytest.raises(ValueError):
        write_bmp(str(tmp_path / "a.bmp"), np.zeros((4, 6), dtype=np.uint8), 300, 300)


def test_unwritable_path(tmp_path):
    path = str(tmp_path / "missing" / "a.bmp")
    with pytest.raises(BitmapWriteError, match="Unable to create bitmap file") as info:
        write_bmp(path, np.zeros((4, 4), dtype=np.uint8), 300, 300)
    assert isinstance(info.value, PaperbakError)
    assert isinstance(info.value, OSError)


def test_failed_write(tmp_path, broken_writes):
    broken_writes(OSError(28, "No space left on device"))
    with pytest.raises(BitmapWriteError, match="Unable to save bitmap"):
        write_bmp(str(tmp_path / "a.bmp"), np.zeros((4, 4), dtype=np.uint8), 300, 300)


def test_short_write(tmp_path, broken_writes):
    broken_writes()
    with pytest.raises(BitmapWriteError, match="Unable to save bitmap"):
        write_bmp(str(tmp_path / "a.bmp"), np.zeros((4, 4), dtype=np.uint8), 300, 300)
