from dataclasses import dataclass

from .constants import (BLACK, DEFAULT_DOTPERCENT, DEFAULT_DPI, DEFAULT_PAPER,
                        DEFAULT_PPI, MAXPAGE, MAXPPI, MINPPI, NGROUP,
                        NGROUPMAX, NGROUPMIN, PAPER_SIZES)
from .errors import ConfigurationError


def paper_size(name):
    """Return (width, height) of a paper preset in thousandths of an inch."""
    try:
        return PAPER_SIZES[name.lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown paper size: {name}") from None


@dataclass
class PrintOptions:
    """
    Configuration of a print job, read once when the job is initialized.

    Resolutions of 0 select DEFAULT_PPI. Paper sizes and reserved
    header/footer space are given in thousandths of an inch and printer
    pixels respectively. frompage and topage are inclusive, 0-based. A
    non-empty preview path also saves a scaled-down image of every page.
    """
    resx: int = 0
    resy: int = 0
    dpi: int = DEFAULT_DPI
    dotpercent: int = DEFAULT_DOTPERCENT
    redundancy: int = NGROUP
    printborder: bool = False
    outbmp: str = ''
    frompage: int = 0
    topage: int = 9999
    paper_width: int = PAPER_SIZES[DEFAULT_PAPER][0]
    paper_height: int = PAPER_SIZES[DEFAULT_PAPER][1]
    extratop: int = 0
    extrabottom: int = 0
    black: int = BLACK
    compress: bool = True
    preview: str = ''

    @property
    def ppix(self):
        return self.resx or DEFAULT_PPI

    @property
    def ppiy(self):
        return self.resy or DEFAULT_PPI

    def validate(self):
        for name, value in (('resx', self.resx), ('resy', self.resy)):
            if value != 0 and not MINPPI <= value <= MAXPPI:
                raise ConfigurationError(
                    f"Unreasonable printer resolution {name}={value}, "
                    f"expected {MINPPI}..{MAXPPI} dpi")
        if self.dpi < 1:
            raise ConfigurationError(f"Dot density must be positive, got {self.dpi}")
        if not 1 <= self.dotpercent <= 100:
            raise ConfigurationError(f"Dot size must be 1..100 percent, got {self.dotpercent}")
        if not NGROUPMIN <= self.redundancy <= NGROUPMAX:
            raise ConfigurationError(
                f"Redundancy must be {NGROUPMIN}..{NGROUPMAX}, got {self.redundancy}")
        if self.frompage < 0 or self.topage < self.frompage:
            raise ConfigurationError(
                f"Invalid page range {self.frompage}..{self.topage}")
        if self.topage >= MAXPAGE:
            raise ConfigurationError(
                f"Last page {self.topage + 1} is beyond page {MAXPAGE}")
        if self.paper_width <= 0 or self.paper_height <= 0:
            raise ConfigurationError("Paper size must be positive")
        if self.extratop < 0 or self.extrabottom < 0:
            raise ConfigurationError("Header and footer space can't be negative")
        if not 0 <= self.black <= 255:
            raise ConfigurationError(f"Dot intensity must be 0..255, got {self.black}")
        if not self.outbmp:
            raise ConfigurationError("Outbmp unspecified, can not create BMP")
        return self
