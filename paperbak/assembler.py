import enum
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .block import Block
from .constants import NDATA, PARITY_SHIFT


class BlockKind(enum.Enum):
    SUPER = 'super'
    DATA = 'data'
    PARITY = 'parity'
    FILLER = 'filler'


@dataclass
class Placement:
    cell: int
    kind: BlockKind
    block: Block
    group: Optional[int] = None     # Index of the redundancy group
    string: Optional[int] = None


@dataclass
class PageLayout:
    offset: int
    length: int
    nstring: int
    ny: int
    placements: List[Placement] = field(default_factory=list)

    def of_kind(self, kind):
        return [p for p in self.placements if p.kind is kind]


def count_strings(length, redundancy):
    """Number of groups needed for length bytes of data."""
    ndata = (length + NDATA - 1) // NDATA
    return (ndata + redundancy - 1) // redundancy


def page_rows(nstring, nx, ny, redundancy):
    """Rows needed by a page with nstring groups, at least 3, at most ny."""
    nblocks = (nstring + 1) * (redundancy + 1) + 1
    return min(ny, max((nblocks + nx - 1) // nx, 3))


def string_rotation(k, string, nx, redundancy):
    # Optimal shift between the first columns of the strings is
    # nx/(redundancy+1).
    return (nx // (redundancy + 1) * string - k % nx + nx) % nx


def cell_index(position, string, nstring, nx, redundancy):
    """
    Cell of the block at position (0 = superblock, i+1 = group i) in the
    given string. Long strings are rotated so that blocks of the same group
    land in different columns, which survives a dead printer column.
    """
    k = string * (nstring + 1)
    if nstring + 1 < nx:
        return k + position
    rot = string_rotation(k, string, nx, redundancy)
    return k + (position + rot) % (nstring + 1)


def assemble_page(buf, offset, geometry, redundancy, superblock):
    """
    Lay out and encode all blocks of the page starting at offset.

    Every string starts with a superblock, followed by one block of each
    group; the last string holds the parity blocks. Cells left over after
    the strings are filled with copies of the superblock.
    """
    nx = geometry.nx
    size = len(buf)
    length = min(size - offset, geometry.pagesize)
    nstring = count_strings(length, redundancy)
    ny = page_rows(nstring, nx, geometry.ny, redundancy)
    layout = PageLayout(offset=offset, length=length, nstring=nstring, ny=ny)
    superblock.encode()
    for j in range(redundancy + 1):
        layout.placements.append(
            Placement(cell_index(0, j, nstring, nx, redundancy), BlockKind.SUPER,
                      superblock, string=j))
    for i in range(nstring):
        group_offset = offset
        cksum = np.full(NDATA, 0xFF, dtype=np.uint8)
        for j in range(redundancy):
            block = Block(offset, buf[offset:offset + NDATA] if offset < size else b'')
            cksum ^= np.frombuffer(block.data, dtype=np.uint8)
            layout.placements.append(
                Placement(cell_index(i + 1, j, nstring, nx, redundancy), BlockKind.DATA,
                          block.encode(), group=i, string=j))
            offset += NDATA
        parity = Block(group_offset ^ (redundancy << PARITY_SHIFT), cksum.tobytes())
        layout.placements.append(
            Placement(cell_index(i + 1, redundancy, nstring, nx, redundancy),
                      BlockKind.PARITY, parity.encode(), group=i, string=redundancy))
    for k in range((nstring + 1) * (redundancy + 1), nx * ny):
        layout.placements.append(Placement(k, BlockKind.FILLER, superblock))
    return layout
