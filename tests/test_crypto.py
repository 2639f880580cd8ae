import hashlib

import pytest

from kmerkle.crypto import B64, B64D, from_hex, jcs_dumps, keccak256, to_hex


def test_keccak256_known_answers():
    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )
    assert keccak256(b"abc").hex() == (
        "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"
    )


def test_keccak256_is_not_sha3():
    assert keccak256(b"") != hashlib.sha3_256(b"").digest()


def test_hex_helpers():
    d = keccak256(b"x")
    assert from_hex(to_hex(d)) == d
    with pytest.raises(ValueError):
        from_hex("ab")
    with pytest.raises(ValueError):
        from_hex(to_hex(d).upper())
    with pytest.raises(ValueError):
        from_hex("z" * 64)


def test_b64_strict():
    assert B64D(B64(b"\x00\x01")) == b"\x00\x01"
    with pytest.raises(ValueError):
        B64D("not base64!")


def test_jcs_sorts_keys():
    assert jcs_dumps({"b": 1, "a": [2, "x"]}) == b'{"a":[2,"x"],"b":1}'


def test_from_hex_rejects_whitespace():
    h = to_hex(keccak256(b"x"))
    spaced = h[:30] + "  " + h[32:]
    assert len(spaced) == 64
    with pytest.raises(ValueError):
        from_hex(spaced)
    with pytest.raises(ValueError):
        from_hex(h + "\n")
