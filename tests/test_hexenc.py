import re

import pytest

from filehash.hexenc import to_hex

HEX64 = re.compile(r"^[0-9a-f]{64}$")


def test_to_hex_most_significant_nibble_first():
    digest = bytes([0x0f, 0xa0]) + bytes(30)
    assert to_hex(digest).startswith("0fa0")


@pytest.mark.parametrize("digest", [bytes(32), bytes([0xff] * 32), bytes(range(32))])
def test_to_hex_is_64_lowercase_hex_chars(digest):
    out = to_hex(digest)
    assert len(out) == 64
    assert HEX64.match(out)
    assert out == digest.hex()


@pytest.mark.parametrize("size", [0, 31, 33])
def test_to_hex_rejects_wrong_size(size):
    with pytest.raises(ValueError):
        to_hex(bytes(size))
