import argparse
import logging
import sys

from tqdm import tqdm

from .constants import (DEFAULT_DOTPERCENT, DEFAULT_DPI, DEFAULT_PAPER, NGROUP,
                        PAPER_SIZES)
from .errors import PaperbakError
from .options import PrintOptions, paper_size
from .prepare import prepare_file
from .printer import PrintJob


def build_parser():
    parser = argparse.ArgumentParser(
        description="Encode a file into printable BMP pages of dot blocks with redundancy.")
    parser.add_argument("input_file", help="File to encode")
    parser.add_argument("output_file", help="Output BMP; multi-page output gets a _NNNN suffix")
    parser.add_argument("--resolution", type=int, default=0,
                        help="Printer resolution in dpi for both axes (default 300)")
    parser.add_argument("--resx", type=int, default=None, help="Horizontal printer resolution")
    parser.add_argument("--resy", type=int, default=None, help="Vertical printer resolution")
    parser.add_argument("--dpi", type=int, default=DEFAULT_DPI, help="Dot density, dots per inch")
    parser.add_argument("--dot-percent", type=int, default=DEFAULT_DOTPERCENT,
                        help="Dot size as percent of dot pitch (1-100)")
    parser.add_argument("--redundancy", type=int, default=NGROUP,
                        help="Data blocks per parity block")
    parser.add_argument("--border", action="store_true", help="Print orientation border around the grid")
    parser.add_argument("--paper", choices=sorted(PAPER_SIZES), default=DEFAULT_PAPER, help="Paper size")
    parser.add_argument("--no-compress", action="store_true", help="Store data without bzip2 compression")
    parser.add_argument("--from-page", type=int, default=1, help="First page to generate (1-based)")
    parser.add_argument("--to-page", type=int, default=10000, help="Last page to generate (1-based)")
    parser.add_argument("--preview", default="",
                        help="Also save a scaled-down image of each page, e.g. preview.png")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debugging details")
    return parser


def options_from_args(args):
    paper_width, paper_height = paper_size(args.paper)
    return PrintOptions(
        resx=args.resx if args.resx is not None else args.resolution,
        resy=args.resy if args.resy is not None else args.resolution,
        dpi=args.dpi,
        dotpercent=args.dot_percent,
        redundancy=args.redundancy,
        printborder=args.border,
        outbmp=args.output_file,
        frompage=args.from_page - 1,
        topage=args.to_page - 1,
        paper_width=paper_width,
        paper_height=paper_height,
        compress=not args.no_compress,
        preview=args.preview,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        options = options_from_args(args)
        payload = prepare_file(args.input_file, compress=options.compress)
        job = PrintJob(payload, options)
        job.next_step()
        g = job.geometry
        for path in tqdm(job.pages(), total=job.pages_to_print, desc="Encoding pages"):
            print(f"BMP generated: {path} ({g.width}x{job.bitmap.height} pixels)")
    except PaperbakError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Generated {len(job.written)} BMP(s) for file {args.input_file}")
    return 0
