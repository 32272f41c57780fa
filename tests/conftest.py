import pytest

from paperbak.options import PrintOptions


@pytest.fixture
def s1_options(tmp_path):
    # A4 at 300 dpi, 4-pixel dot pitch: 13x21 cells, 1952x3070 bitmap
    return PrintOptions(resx=300, resy=300, dpi=67, dotpercent=70, redundancy=1,
                        printborder=True, outbmp=str(tmp_path / "page.bmp"))


@pytest.fixture
def tiny_options(tmp_path):
    # 4.5x4 inch paper at 100 dpi: 3x3 cells, 276x275 bitmap, 270 bytes per page
    return PrintOptions(resx=100, resy=100, dpi=50, dotpercent=70, redundancy=1,
                        printborder=True, paper_width=4500, paper_height=4000,
                        outbmp=str(tmp_path / "tiny.bmp"))


class BrokenFile:
    def __init__(self, error):
        self.error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def write(self, data):
        if self.error is not None:
            raise self.error
        return len(data) // 2


@pytest.fixture
def broken_writes(monkeypatch):
    """Make BMP files open but fail on write; error=None gives short writes."""
    def install(error=None):
        monkeypatch.setattr("paperbak.bmp.open", lambda path, mode: BrokenFile(error),
                            raising=False)
    return install
