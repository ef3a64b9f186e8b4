from typing import Final

import dataclasses

from construct import Bytes
from construct_typed import DataclassMixin, DataclassStruct, csfield


DEX_MAGIC_PREFIX: Final[bytes] = b'dex\n'

CHECKSUM_OFFSET: Final[int] = 0x8
CHECKSUM_SIZE: Final[int] = 4
PAYLOAD_OFFSET: Final[int] = CHECKSUM_OFFSET + CHECKSUM_SIZE


@dataclasses.dataclass
class DexHeaderPrefix(DataclassMixin):
    # Only the part of header_item that comes before the checksummed area.
    magic: bytes = csfield(Bytes(8))
    checksum: bytes = csfield(Bytes(CHECKSUM_SIZE))

    def looks_like_dex(self) -> bool:
        return self.magic.startswith(DEX_MAGIC_PREFIX) and self.magic[7] == 0


CsDexHeaderPrefix = DataclassStruct(DexHeaderPrefix)

# 12
DEX_HEADER_PREFIX_SIZE: Final[int] = CsDexHeaderPrefix.sizeof()
