import logging
from dataclasses import dataclass

from .constants import NDATA, NDOT
from .errors import GeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageGeometry:
    """Layout of one page in printer pixels. All values are integers."""
    ppix: int
    ppiy: int
    dx: int             # Dot pitch
    dy: int
    px: int             # Dot size
    py: int
    nx: int             # Cells per row
    ny: int             # Cells per column on a full page
    border: int         # Width of the border around the data grid
    width: int          # Bitmap width, multiple of 4
    height: int         # Bitmap height of a full page
    pagesize: int       # Useful data bytes per page
    printborder: bool = False

    @property
    def cell_width(self):
        return (NDOT + 3) * self.dx

    @property
    def cell_height(self):
        return (NDOT + 3) * self.dy

    def page_height(self, rows):
        return rows * self.cell_height + self.py + 2 * self.border


def plan_geometry(options):
    """
    Compute the page geometry for the given options.

    The printable area is the paper minus the margins (one inch on the
    left, half an inch elsewhere) and any space reserved for header and
    footer. Each cell is NDOT+3 dots wide to leave room for the grid.
    Raises GeometryError if the page can't hold at least one full group,
    its parity block and the superblocks.
    """
    ppix, ppiy = options.ppix, options.ppiy
    redundancy = options.redundancy
    width = ppix * options.paper_width // 1000
    height = ppiy * options.paper_height // 1000
    borderleft = ppix
    borderright = ppix // 2
    bordertop = ppiy // 2
    borderbottom = ppiy // 2
    width -= borderleft + borderright
    height -= bordertop + borderbottom + options.extratop + options.extrabottom
    dx = max(ppix // options.dpi, 2)
    px = max(dx * options.dotpercent // 100, 1)
    dy = max(ppiy // options.dpi, 2)
    py = max(dy * options.dotpercent // 100, 1)
    if options.printborder:
        border = dx * 16
    elif options.outbmp:
        border = 25
    else:
        border = 0
    nx = (width - px - 2 * border) // (NDOT * dx + 3 * dx)
    ny = (height - py - 2 * border) // (NDOT * dy + 3 * dy)
    if nx < redundancy + 1 or ny < 3 or nx * ny < 2 * redundancy + 2:
        raise GeometryError("Printable area is too small, reduce borders or block size")
    width = (nx * (NDOT + 3) * dx + px + 2 * border + 3) & ~3
    height = ny * (NDOT + 3) * dy + py + 2 * border
    pagesize = (nx * ny - redundancy - 2) // (redundancy + 1) * redundancy * NDATA
    logger.debug("Page grid %ix%i cells, dot pitch %ix%i, bitmap %ix%i, %i bytes per page",
                 nx, ny, dx, dy, width, height, pagesize)
    return PageGeometry(ppix=ppix, ppiy=ppiy, dx=dx, dy=dy, px=px, py=py,
                        nx=nx, ny=ny, border=border, width=width,
                        height=height, pagesize=pagesize,
                        printborder=bool(options.printborder))
