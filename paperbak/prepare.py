import bz2
import logging
import os
import stat
import time
from dataclasses import dataclass

from .constants import (FILE_ATTRIBUTE_HIDDEN, FILE_ATTRIBUTE_NORMAL,
                        FILE_ATTRIBUTE_READONLY, MAXSIZE)
from .crc import crc16
from .errors import InputError
from .superblock import filetime

logger = logging.getLogger(__name__)


@dataclass
class Payload:
    """Prepared input of a print job: the aligned buffer and its metadata."""
    buffer: bytes
    origsize: int
    compressed: bool = False
    encrypted: bool = False
    attributes: int = FILE_ATTRIBUTE_NORMAL
    modified: int = 0
    filecrc: int = 0
    name: str = ''

    @property
    def alignedsize(self):
        return len(self.buffer)


def align(data, boundary=16):
    """Zero-pad data to a multiple of boundary bytes."""
    size = (len(data) + boundary - 1) // boundary * boundary
    return bytes(data).ljust(size, b'\x00')


def file_attributes(path, st):
    attributes = getattr(st, 'st_file_attributes', None)
    if attributes is not None:
        return attributes
    attributes = 0
    if not st.st_mode & stat.S_IWUSR:
        attributes |= FILE_ATTRIBUTE_READONLY
    if os.path.basename(path).startswith('.'):
        attributes |= FILE_ATTRIBUTE_HIDDEN
    return attributes or FILE_ATTRIBUTE_NORMAL


def prepare_bytes(data, name, compress=True, modified=None, attributes=FILE_ATTRIBUTE_NORMAL):
    """
    Build the payload for data. Data is compressed with bzip2 when that makes
    it smaller, then padded to 16 bytes; the file CRC covers the padded buffer.
    """
    origsize = len(data)
    if origsize == 0 or origsize > MAXSIZE:
        raise InputError(f"Invalid file size {origsize} (empty or larger than {MAXSIZE} bytes)")
    compressed = False
    if compress:
        packed = bz2.compress(data, 9)
        if len(packed) < origsize:
            data, compressed = packed, True
            logger.debug("Compressed %i bytes to %i", origsize, len(packed))
        else:
            logger.debug("Compression doesn't reduce size, storing %i bytes as is", origsize)
    buffer = align(data)
    if modified is None:
        modified = filetime(time.time())
    return Payload(buffer=buffer,
                   origsize=origsize,
                   compressed=compressed,
                   attributes=attributes,
                   modified=modified,
                   filecrc=crc16(buffer),
                   name=os.path.basename(name))


def prepare_file(path, compress=True):
    try:
        st = os.stat(path)
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise InputError(f"Unable to read {path}: {e}") from e
    return prepare_bytes(data, path, compress=compress,
                         modified=filetime(st.st_mtime),
                         attributes=file_attributes(path, st))
