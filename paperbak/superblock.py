import os
import struct
from dataclasses import dataclass

from .block import Block
from .constants import (ATTRIBUTE_MASK, FILENAME_SIZE, PBM_COMPRESSED,
                        PBM_ENCRYPTED, SUPERBLOCK)

# datasize, pagesize, origsize, mode, attributes, page, modified, filecrc, name
SUPERDATA_FORMAT = f'<IIIBBHQH{FILENAME_SIZE}s'

# 100 ns ticks between 1601-01-01 and 1970-01-01
FILETIME_EPOCH = 116444736000000000


def filetime(timestamp):
    """Convert POSIX seconds to a Windows FILETIME."""
    return int(round(timestamp * 10000000)) + FILETIME_EPOCH


def pack_name(name):
    """Base name as UTF-8, truncated so the field always ends with NUL."""
    raw = os.path.basename(name).encode('utf-8', errors='ignore')
    return raw[:FILENAME_SIZE - 1].ljust(FILENAME_SIZE, b'\x00')


@dataclass
class SuperData:
    """Page-level metadata carried by every superblock."""
    datasize: int = 0
    pagesize: int = 0
    origsize: int = 0
    mode: int = 0
    attributes: int = 0
    page: int = 0
    modified: int = 0
    filecrc: int = 0
    name: str = ''

    @classmethod
    def for_payload(cls, payload):
        mode = 0
        if payload.compressed:
            mode |= PBM_COMPRESSED
        if payload.encrypted:
            mode |= PBM_ENCRYPTED
        return cls(datasize=payload.alignedsize,
                   origsize=payload.origsize,
                   mode=mode,
                   attributes=payload.attributes & ATTRIBUTE_MASK,
                   modified=payload.modified,
                   filecrc=payload.filecrc & 0xFFFF,
                   name=payload.name)

    def pack(self):
        return struct.pack(SUPERDATA_FORMAT,
                           self.datasize, self.pagesize, self.origsize,
                           self.mode & 0xFF, self.attributes & ATTRIBUTE_MASK,
                           self.page, self.modified, self.filecrc,
                           pack_name(self.name))

    def to_block(self):
        return Block(SUPERBLOCK, self.pack())

    @classmethod
    def from_block(cls, block):
        if block.addr != SUPERBLOCK:
            raise ValueError(f"Not a superblock: address 0x{block.addr:08X}")
        (datasize, pagesize, origsize, mode, attributes, page, modified,
         filecrc, name) = struct.unpack(SUPERDATA_FORMAT, block.data)
        name = name.split(b'\x00', 1)[0].decode('utf-8', errors='replace')
        return cls(datasize, pagesize, origsize, mode, attributes, page,
                   modified, filecrc, name)
