from typing import BinaryIO, Self

import logging
import os

from .common.formats import (
    CHECKSUM_OFFSET,
    DEX_HEADER_PREFIX_SIZE,
    PAYLOAD_OFFSET,
    CsDexHeaderPrefix,
    DexHeaderPrefix,
)
from .common.utils import ByteOrder, adler32_checksum, check_byteorder, checksum_from_bytes, checksum_to_bytes


logger = logging.getLogger('dex_checksum_tools.dex')


class DexFormatError(ValueError):
    pass


class Dex:
    """
    Holds the complete content of a DEX (Dalvik Executable) file and inspects or repairs the Adler-32 checksum
    stored in its header.

    The checksum field lives at offset 8 through 11 and covers everything from offset 12 to the end of the file.
    """
    _bytes: bytearray
    byteorder: ByteOrder

    def __init__(self, data: bytes | bytearray | memoryview, byteorder: ByteOrder = 'big'):
        self.byteorder = check_byteorder(byteorder)
        if len(data) < DEX_HEADER_PREFIX_SIZE:
            raise DexFormatError(
                f'File too short to hold a DEX header checksum ({len(data)} < {DEX_HEADER_PREFIX_SIZE} bytes).'
            )
        self._bytes = bytearray(data)
        logger.debug('Loaded %d bytes.', len(self._bytes))
        if not self.header.looks_like_dex():
            logger.warning('Unexpected DEX magic %r.', self.header.magic)

    @classmethod
    def from_stream(cls, stream: BinaryIO, byteorder: ByteOrder = 'big') -> Self:
        return cls(stream.read(), byteorder=byteorder)

    @classmethod
    def from_path(cls, path: str | os.PathLike, byteorder: ByteOrder = 'big') -> Self:
        logger.debug('Reading %s', path)
        with open(path, 'rb') as f:
            return cls.from_stream(f, byteorder=byteorder)

    @property
    def header(self) -> DexHeaderPrefix:
        return CsDexHeaderPrefix.parse(bytes(self._bytes[:DEX_HEADER_PREFIX_SIZE]))

    @property
    def data(self) -> bytes:
        return bytes(self._bytes)

    def current_checksum(self) -> bytes:
        """
        Return the checksum stored in the header, verbatim.
        """
        return self.header.checksum

    def expect_checksum(self) -> bytes:
        """
        Compute the checksum over the data following the checksum field, serialized in this buffer's byte order.
        """
        with memoryview(self._bytes) as mv, mv[PAYLOAD_OFFSET:] as payload:
            checksum = adler32_checksum(payload)
        logger.debug('Expected checksum %#010x', checksum)
        return checksum_to_bytes(checksum, self.byteorder)

    def check_checksum(self) -> bool:
        return self.current_checksum() == self.expect_checksum()

    def correct_checksum(self) -> bool:
        """
        Overwrite the stored checksum with the expected one if they differ.

        :return: True if the header was modified.
        """
        expect = self.expect_checksum()
        current = self.current_checksum()
        if current == expect:
            return False
        self._bytes[CHECKSUM_OFFSET:PAYLOAD_OFFSET] = expect
        logger.info('Corrected checksum %s -> %s', current.hex(), expect.hex())
        return True

    def write_to_file(self, path: str | os.PathLike) -> None:
        with open(path, 'wb') as f:
            f.write(self._bytes)
        logger.info('Wrote %d bytes to %s', len(self._bytes), path)

    def __len__(self) -> int:
        return len(self._bytes)

    def __str__(self) -> str:
        return f'Dex {{ bytes: {list(self._bytes)} }}'

    def __repr__(self) -> str:
        return (
            f'<Dex size={len(self._bytes)} '
            f'current={checksum_from_bytes(self.current_checksum(), self.byteorder):#010x} '
            f'expect={checksum_from_bytes(self.expect_checksum(), self.byteorder):#010x}>'
        )
