# Block geometry
NDOT = 32           # Dots per block edge
NDATA = 90          # Useful data bytes per block
BLOCK_SIZE = 128    # addr(4) + data(NDATA) + crc(2) + ecc
ECC_SIZE = BLOCK_SIZE - NDATA - 6
FILENAME_SIZE = 64

SUPERBLOCK = 0xFFFFFFFF
MAXSIZE = 0x0FFFFF80  # Largest input accepted, bytes
MAXPAGE = 0xFFFF     # Largest 1-based page number a superblock can hold

# Superblock mode bits
PBM_COMPRESSED = 0x01
PBM_ENCRYPTED = 0x02

# Windows file attributes kept in the superblock
FILE_ATTRIBUTE_READONLY = 0x01
FILE_ATTRIBUTE_HIDDEN = 0x02
FILE_ATTRIBUTE_SYSTEM = 0x04
FILE_ATTRIBUTE_ARCHIVE = 0x20
FILE_ATTRIBUTE_NORMAL = 0x80
ATTRIBUTE_MASK = (FILE_ATTRIBUTE_READONLY | FILE_ATTRIBUTE_HIDDEN |
                  FILE_ATTRIBUTE_SYSTEM | FILE_ATTRIBUTE_ARCHIVE |
                  FILE_ATTRIBUTE_NORMAL)

# Redundancy: one parity block per NGROUP data blocks
NGROUP = 5
NGROUPMIN = 1
NGROUPMAX = 10

# Printer / bitmap defaults
DEFAULT_PPI = 300
MINPPI = 50
MAXPPI = 4800
DEFAULT_DPI = 200       # Dot density, dots per inch
DEFAULT_DOTPERCENT = 70

# Grayscale levels. Dots are dark gray so grid lines stand out on scans.
BLACK = 64
WHITE = 255
GRID = 0

PREVIEW_SIZE = 512   # Longest side of a page preview, pixels

# Paper sizes, thousandths of an inch
PAPER_SIZES = {
    'a4': (8270, 11690),
    'letter': (8500, 11000),
}
DEFAULT_PAPER = 'a4'

PARITY_SHIFT = 28
CRC_XOR = 0x55AA
