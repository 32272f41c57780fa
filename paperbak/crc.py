import binascii


def crc16(data, crc=0):
    """CRC-16/XMODEM (CCITT polynomial 0x1021, initial value 0)."""
    return binascii.crc_hqx(bytes(data), crc) & 0xFFFF
