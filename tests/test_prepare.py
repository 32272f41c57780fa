import bz2
import os

import pytest

from paperbak.constants import (FILE_ATTRIBUTE_HIDDEN, FILE_ATTRIBUTE_NORMAL,
                                FILE_ATTRIBUTE_READONLY)
from paperbak.crc import crc16
from paperbak.errors import InputError
from paperbak.prepare import align, prepare_bytes, prepare_file
from paperbak.superblock import FILETIME_EPOCH, filetime


@pytest.mark.parametrize("length, expected", [(1, 16), (16, 16), (17, 32), (100, 112)])
def test_align(length, expected):
    aligned = align(b"\x01" * length)
    assert len(aligned) == expected
    assert aligned[length:] == bytes(expected - length)


def test_raw_payload():
    payload = prepare_bytes(b"A", "dir/a.txt", compress=False, modified=5)
    assert payload.buffer == b"A" + bytes(15)
    assert (payload.origsize, payload.alignedsize) == (1, 16)
    assert not payload.compressed and not payload.encrypted
    assert payload.name == "a.txt"
    assert payload.modified == 5
    assert payload.attributes == FILE_ATTRIBUTE_NORMAL
    assert payload.filecrc == crc16(payload.buffer)


def test_compressible_payload():
    data = b"paper backup " * 1000
    payload = prepare_bytes(data, "text.txt")
    assert payload.compressed
    assert payload.origsize == len(data)
    assert payload.alignedsize < len(data)
    # Decompression stops at the end of the stream, before the padding
    decompressor = bz2.BZ2Decompressor()
    assert decompressor.decompress(payload.buffer) == data
    assert not decompressor.unused_data.strip(b"\x00")
    assert payload.alignedsize % 16 == 0


def test_incompressible_payload_is_stored():
    # bzip2 adds a header to a single byte
    payload = prepare_bytes(b"Z", "z.bin")
    assert not payload.compressed
    assert payload.buffer[:1] == b"Z"


def test_modified_defaults_to_now():
    payload = prepare_bytes(b"abc", "a")
    assert payload.modified > FILETIME_EPOCH


@pytest.mark.parametrize("data", [b"", bytearray()])
def test_empty_input(data):
    with pytest.raises(InputError):
        prepare_bytes(data, "empty")


def test_prepare_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello paper")
    os.utime(path, (1000000000, 1000000000))
    payload = prepare_file(str(path), compress=False)
    assert payload.name == "notes.txt"
    assert payload.buffer[:11] == b"hello paper"
    assert payload.modified == filetime(1000000000)
    assert payload.modified == 1000000000 * 10000000 + FILETIME_EPOCH


def test_hidden_and_readonly_attributes(tmp_path):
    path = tmp_path / ".secret"
    path.write_bytes(b"x")
    os.chmod(path, 0o444)
    try:
        payload = prepare_file(str(path))
    finally:
        os.chmod(path, 0o644)
    if os.name != "nt":
        assert payload.attributes == FILE_ATTRIBUTE_HIDDEN | FILE_ATTRIBUTE_READONLY


def test_missing_file(tmp_path):
    with pytest.raises(InputError, match="Unable to read"):
        prepare_file(str(tmp_path / "nope.bin"))
