import pytest

from dex_checksum_tools.common.utils import ADLER32_MODULUS

DEX_MAGIC = b'dex\n035\x00'


def reference_adler32(data: bytes) -> int:
    a, b = 1, 0
    for byte in data:
        a = (a + byte) % ADLER32_MODULUS
        b = (b + a) % ADLER32_MODULUS
    return (b << 16) | a


def make_dex(payload: bytes, checksum: bytes | None = None, magic: bytes = DEX_MAGIC) -> bytes:
    if checksum is None:
        checksum = reference_adler32(payload).to_bytes(4, 'big')
    return magic + checksum + payload


@pytest.fixture
def payload() -> bytes:
    return bytes(range(256)) * 5 + b'classes'


@pytest.fixture
def good_dex(payload) -> bytes:
    return make_dex(payload)


@pytest.fixture
def bad_dex(payload) -> bytes:
    return make_dex(payload, checksum=b'\xde\xad\xbe\xef')
