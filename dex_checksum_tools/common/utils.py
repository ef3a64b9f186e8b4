from typing import Literal

import zlib

from .formats import CHECKSUM_SIZE


ByteOrder = Literal['big', 'little']

BYTE_ORDERS: tuple[ByteOrder, ...] = ('big', 'little')

ADLER32_MODULUS = 65521


def adler32_checksum(data: bytes | bytearray | memoryview) -> int:
    return zlib.adler32(data, 1) & 0xffffffff


def check_byteorder(byteorder: str) -> ByteOrder:
    if byteorder not in BYTE_ORDERS:
        raise ValueError(f'Byte order must be one of {", ".join(BYTE_ORDERS)}, got {byteorder!r}.')
    return byteorder  # type: ignore[return-value]


def checksum_to_bytes(checksum: int, byteorder: ByteOrder = 'big') -> bytes:
    return checksum.to_bytes(CHECKSUM_SIZE, byteorder)


def checksum_from_bytes(checksum: bytes, byteorder: ByteOrder = 'big') -> int:
    if len(checksum) != CHECKSUM_SIZE:
        raise ValueError('Size mismatch.')
    return int.from_bytes(checksum, byteorder)
