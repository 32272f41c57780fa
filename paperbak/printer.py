import enum
import logging

from .assembler import assemble_page
from .bmp import bitmap_path, write_bmp
from .errors import PaperbakError
from .geometry import plan_geometry
from .prepare import prepare_file
from .raster import PageBitmap
from .superblock import SuperData

logger = logging.getLogger(__name__)


class Step(enum.IntEnum):
    IDLE = 0
    INITIALIZE = 1
    PRINT_PAGE = 2
    FINISH = 3


class PrintJob:
    """
    Turns a prepared payload into page bitmaps, one step per call.

    The job starts in INITIALIZE; next_step() plans the geometry and then
    emits one page per call until the data or the requested page range is
    exhausted. Any error stops the job, releasing the bitmap, and is
    re-raised to the caller.
    """

    def __init__(self, payload, options):
        self.payload = payload
        self.options = options
        self.buf = payload.buffer
        self.datasize = payload.alignedsize
        self.redundancy = options.redundancy
        self.superdata = SuperData.for_payload(payload)
        self.geometry = None
        self.bitmap = None
        self.page = options.frompage
        self.topage = options.topage
        self.written = []
        self.layout = None
        self.state = Step.INITIALIZE

    @property
    def done(self):
        return self.state == Step.IDLE

    @property
    def npages(self):
        if self.geometry is None:
            return 0
        pagesize = self.geometry.pagesize
        return (self.datasize + pagesize - 1) // pagesize

    @property
    def pages_to_print(self):
        """Pages the job will emit in total, within frompage..topage."""
        return max(min(self.npages, self.topage + 1) - self.options.frompage, 0)

    def next_step(self):
        handlers = {
            Step.INITIALIZE: self.initialize,
            Step.PRINT_PAGE: self.print_next_page,
            Step.FINISH: self.stop,
        }
        handler = handlers.get(self.state)
        if handler is None:
            return
        try:
            handler()
        except PaperbakError as e:
            # Reported once by the caller
            logger.debug("Print job stopped: %s", e)
            self.stop()
            raise
        except Exception:
            logger.exception("Print job failed")
            self.stop()
            raise

    def initialize(self):
        self.options.validate()
        self.geometry = plan_geometry(self.options)
        self.superdata.pagesize = self.geometry.pagesize
        self.bitmap = PageBitmap(self.geometry, black=self.options.black)
        self.state = Step.PRINT_PAGE

    def print_next_page(self):
        g = self.geometry
        offset = self.page * g.pagesize
        if offset >= self.datasize or self.page > self.topage:
            self.state = Step.FINISH
            return
        logger.info("Processing page %i of %i...", self.page + 1, self.npages)
        # Page number is 1-based
        self.superdata.page = self.page + 1
        layout = assemble_page(self.buf, offset, g, self.redundancy, self.superdata.to_block())
        bitmap = self.bitmap
        bitmap.start_page(layout.ny)
        bitmap.draw_grid()
        if g.printborder:
            bitmap.fill_border()
        for placement in layout.placements:
            bitmap.draw_block(placement.cell, placement.block)
        path = bitmap_path(self.options.outbmp, self.page, self.npages)
        write_bmp(path, bitmap.page, g.ppix, g.ppiy)
        if self.options.preview:
            bitmap.save_preview(bitmap_path(self.options.preview, self.page, self.npages))
        self.layout = layout
        self.written.append(path)
        self.page += 1

    def stop(self):
        self.bitmap = None
        self.state = Step.IDLE

    def cancel(self):
        if not self.done:
            logger.info("Print job cancelled after %i page(s)", len(self.written))
        self.stop()

    def pages(self):
        """Drive the job, yielding the path of each written page."""
        while not self.done:
            count = len(self.written)
            self.next_step()
            if len(self.written) > count:
                yield self.written[-1]

    def run(self):
        for _ in self.pages():
            pass
        return self.written


def encode_file(path, options):
    """Encode the file at path into BMP pages; returns the written paths."""
    payload = prepare_file(path, compress=options.compress)
    return PrintJob(payload, options).run()
