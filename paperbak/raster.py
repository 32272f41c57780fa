import numpy as np
from PIL import Image

from .block import expand_bits
from .constants import BLACK, GRID, NDOT, PREVIEW_SIZE, WHITE
from .errors import BitmapWriteError, ResourceError


def border_words(bx, by, nx, ny):
    """
    Raster of a border cell at (bx, by), outside the data grid. Odd rows mark
    the side of the grid the cell lies on, so the decoder can orient the page.
    """
    words = []
    for j in range(NDOT):
        if j % 2 == 0:
            t = 0x55555555
        elif by < 0 and j <= 24:
            t = 0
        elif by >= ny and j > 8:
            t = 0
        elif bx < 0:
            t = 0xAA000000
        elif bx >= nx:
            t = 0x000000AA
        else:
            t = 0xAAAAAAAA
        words.append(t)
    return np.array(words, dtype=np.uint32)


class PageBitmap:
    """
    8-bit page raster. The buffer is kept in BMP scanline order (bottom-up)
    and sized for a full page; a shorter last page uses its first rows.
    """

    def __init__(self, geometry, black=BLACK):
        self.geometry = geometry
        self.black = black
        try:
            self.bits = np.full((geometry.height, geometry.width), WHITE, dtype=np.uint8)
        except MemoryError:
            raise ResourceError("Low memory, can't create bitmap") from None
        self.ny = geometry.ny
        self.height = geometry.height
        self._tile = np.zeros((geometry.dy, geometry.dx), dtype=np.uint8)
        self._tile[:geometry.py, :geometry.px] = 1

    @property
    def width(self):
        return self.geometry.width

    @property
    def page(self):
        """Scanlines of the current page, bottom row first."""
        return self.bits[:self.height]

    @property
    def image(self):
        """Writable top-down view of the current page."""
        return self.page[::-1]

    def to_image(self):
        return Image.fromarray(np.ascontiguousarray(self.image))

    def save_preview(self, path, size=PREVIEW_SIZE):
        """Save the page scaled to fit size x size pixels, format taken from the extension."""
        image = self.to_image()
        image.thumbnail((size, size))
        try:
            image.save(path)
        except (OSError, ValueError) as e:
            raise BitmapWriteError(f"Unable to save preview {path}: {e}") from e
        return path

    def start_page(self, rows):
        self.ny = rows
        self.height = self.geometry.page_height(rows)
        self.page[:] = WHITE

    def draw_grid(self):
        g = self.geometry
        page = self.page
        for i in range(g.nx + 1):
            x = i * g.cell_width + g.border
            if g.printborder:
                page[:, x:x + g.px] = GRID
            else:
                page[g.border:g.border + self.ny * g.cell_height, x:x + g.px] = GRID
        for j in range(self.ny + 1):
            y = j * g.cell_height + g.border
            if g.printborder:
                page[y:y + g.py, :] = GRID
            else:
                page[y:y + g.py, g.border:g.border + g.nx * g.cell_width + g.px] = GRID

    def fill_border(self):
        nx, ny = self.geometry.nx, self.ny
        for j in range(-1, ny + 1):
            self.fill_block(-1, j)
            self.fill_block(nx, j)
        for i in range(nx):
            self.fill_block(i, -1)
            self.fill_block(i, ny)

    def cell_origin(self, bx, by):
        """Top-left pixel of the dots in cell (bx, by), top-down coordinates."""
        g = self.geometry
        return (bx * g.cell_width + 2 * g.dx + g.border,
                by * g.cell_height + 2 * g.dy + g.border)

    def draw_block(self, index, block):
        """Paint an encoded block into cell index, numbered row-major."""
        nx = self.geometry.nx
        x0, y0 = self.cell_origin(index % nx, index // nx)
        self._stamp(x0, y0, block.dots())

    def fill_block(self, bx, by):
        """Paint the border raster into cell (bx, by), clipped to the bitmap."""
        x0, y0 = self.cell_origin(bx, by)
        self._stamp(x0, y0, expand_bits(border_words(bx, by, self.geometry.nx, self.ny)))

    def _stamp(self, x0, y0, dots):
        mask = np.kron(dots.astype(np.uint8), self._tile).astype(bool)
        image = self.image
        height, width = image.shape
        top, left = max(y0, 0), max(x0, 0)
        bottom = min(y0 + mask.shape[0], height)
        right = min(x0 + mask.shape[1], width)
        if top >= bottom or left >= right:
            return
        region = image[top:bottom, left:right]
        region[mask[top - y0:bottom - y0, left - x0:right - x0]] = self.black
