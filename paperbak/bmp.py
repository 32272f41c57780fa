import logging
import os
import struct

from .errors import BitmapWriteError

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PALETTE_SIZE = 256 * 4
PIXEL_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE + PALETTE_SIZE

# Grayscale palette, blue-green-red-reserved
PALETTE = b''.join(bytes((i, i, i, 0)) for i in range(256))


def bitmap_path(outbmp, page, npages):
    """File name of the 0-based page; multi-page jobs get a _NNNN suffix."""
    base, ext = os.path.splitext(outbmp)
    if not ext:
        ext = '.bmp'
    if npages > 1:
        return f"{base}_{page + 1:04d}{ext}"
    return f"{base}{ext}"


def bmp_headers(width, height, ppix, ppiy):
    """File header, BITMAPINFOHEADER and palette of an 8-bit bitmap."""
    bmp_data = bytearray()

    # BMP Header
    bmp_data.extend(b'BM')
    bmp_data.extend(struct.pack('<I', PIXEL_OFFSET + width * height))  # File size
    bmp_data.extend(struct.pack('<HH', 0, 0))  # Reserved
    bmp_data.extend(struct.pack('<I', PIXEL_OFFSET))  # Pixel data offset

    # DIB Header
    bmp_data.extend(struct.pack('<I', INFO_HEADER_SIZE))
    bmp_data.extend(struct.pack('<i', width))
    bmp_data.extend(struct.pack('<i', height))  # Positive: bottom-up rows
    bmp_data.extend(struct.pack('<H', 1))  # Planes
    bmp_data.extend(struct.pack('<H', 8))  # Bits per pixel
    bmp_data.extend(struct.pack('<I', 0))  # BI_RGB
    bmp_data.extend(struct.pack('<I', 0))  # Image size (0 for uncompressed)
    bmp_data.extend(struct.pack('<i', ppix * 10000 // 254))  # X pixels per meter
    bmp_data.extend(struct.pack('<i', ppiy * 10000 // 254))  # Y pixels per meter
    bmp_data.extend(struct.pack('<I', 256))  # Colors used
    bmp_data.extend(struct.pack('<I', 256))  # Important colors

    bmp_data.extend(PALETTE)
    return bytes(bmp_data)


def write_bmp(path, pixels, ppix, ppiy):
    """
    Save an 8-bit raster, given in scanline order (bottom row first), as an
    uncompressed BMP. The width must already be a multiple of 4.
    """
    height, width = pixels.shape
    if width % 4:
        raise ValueError(f"Bitmap width {width} is not a multiple of 4")
    headers = bmp_headers(width, height, ppix, ppiy)
    data = pixels.tobytes()
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise BitmapWriteError(f"Unable to create bitmap file {path}: {e}") from e
    try:
        with f:
            written = f.write(headers) + f.write(data)
    except OSError as e:
        raise BitmapWriteError(f"Unable to save bitmap {path}: {e}") from e
    if written != len(headers) + len(data):
        raise BitmapWriteError(f"Unable to save bitmap {path}")
    logger.info("BMP generated: %s (%ix%i pixels)", path, width, height)
    return path
