from reedsolo import RSCodec

from .constants import ECC_SIZE

# CCSDS RS(255,223) in conventional representation, shortened to the
# 96 bytes (addr + data + crc) that precede the ECC tail of a block.
FIELD_POLY = 0x187
FIRST_ROOT = 112
ROOT_STEP = 11
MESSAGE_SIZE = 223 - 127


def alpha_power(n, poly=FIELD_POLY):
    """Return alpha**n in GF(2^8) generated by poly, alpha = x."""
    x = 1
    for _ in range(n):
        x <<= 1
        if x & 0x100:
            x ^= poly
    return x


# Roots are alpha^(11*(112+i)); using alpha^11 as the codec base keeps
# reedsolo's consecutive-root model.
_rs = RSCodec(ECC_SIZE, nsize=255, fcr=FIRST_ROOT, prim=FIELD_POLY,
              generator=alpha_power(ROOT_STEP))


def encode8(message):
    """Return the 32 parity bytes for a 96-byte block message."""
    message = bytes(message)
    if len(message) != MESSAGE_SIZE:
        raise ValueError(f"Expected {MESSAGE_SIZE} message bytes, got {len(message)}")
    return bytes(_rs.encode(message)[-ECC_SIZE:])
