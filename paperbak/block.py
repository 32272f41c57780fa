import struct

import numpy as np

from .constants import BLOCK_SIZE, CRC_XOR, NDATA, NDOT
from .crc import crc16
from .ecc import encode8

_CRC_OFFSET = 4 + NDATA
_ECC_OFFSET = _CRC_OFFSET + 2

# Even words are XOR-ed with 0x55, odd words with 0xAA, so that empty blocks
# and low addresses still print as a dense checkerboard.
DOT_MASK = np.array([0x55555555, 0xAAAAAAAA] * (NDOT // 2), dtype=np.uint32)
_SHIFTS = np.arange(NDOT, dtype=np.uint32)


def expand_bits(words):
    """Expand 32 words into a 32x32 boolean matrix, bit i of word j at [j, i]."""
    words = np.asarray(words, dtype=np.uint32)
    return ((words[:, None] >> _SHIFTS) & 1).astype(bool)


class Block:
    """
    A 128-byte block record: 4-byte address, NDATA data bytes, CRC-16 and the
    Reed-Solomon tail. Data blocks carry the offset of their data, parity
    blocks the group offset XOR-ed with redundancy << 28 and superblocks the
    SUPERBLOCK sentinel.
    """

    __slots__ = ('raw',)

    def __init__(self, addr=0, data=b''):
        self.raw = bytearray(BLOCK_SIZE)
        self.addr = addr
        self.data = data

    @classmethod
    def from_bytes(cls, raw):
        if len(raw) != BLOCK_SIZE:
            raise ValueError(f"Expected {BLOCK_SIZE} bytes, got {len(raw)}")
        block = cls()
        block.raw[:] = raw
        return block

    def __bytes__(self):
        return bytes(self.raw)

    def __repr__(self):
        return f"Block(addr=0x{self.addr:08X})"

    @property
    def addr(self):
        return struct.unpack_from('<I', self.raw, 0)[0]

    @addr.setter
    def addr(self, value):
        struct.pack_into('<I', self.raw, 0, value & 0xFFFFFFFF)

    @property
    def data(self):
        return bytes(self.raw[4:_CRC_OFFSET])

    @data.setter
    def data(self, value):
        value = bytes(value)
        if len(value) > NDATA:
            raise ValueError(f"Block data is limited to {NDATA} bytes, got {len(value)}")
        self.raw[4:_CRC_OFFSET] = value.ljust(NDATA, b'\x00')

    @property
    def crc(self):
        return struct.unpack_from('<H', self.raw, _CRC_OFFSET)[0]

    @crc.setter
    def crc(self, value):
        struct.pack_into('<H', self.raw, _CRC_OFFSET, value & 0xFFFF)

    @property
    def ecc(self):
        return bytes(self.raw[_ECC_OFFSET:])

    @property
    def crc_ok(self):
        return crc16(self.raw[:_CRC_OFFSET]) ^ CRC_XOR == self.crc

    def encode(self):
        """Fill in the CRC and the ECC tail. Returns the block itself."""
        self.crc = crc16(self.raw[:_CRC_OFFSET]) ^ CRC_XOR
        self.raw[_ECC_OFFSET:] = encode8(self.raw[:_ECC_OFFSET])
        return self

    def words(self):
        return np.frombuffer(bytes(self.raw), dtype='<u4').astype(np.uint32)

    def dots(self):
        """32x32 dot matrix as printed, row j from word j."""
        return expand_bits(self.words() ^ DOT_MASK)
