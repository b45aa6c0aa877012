import hashlib

import mmh3
import pytest
import xxhash

from bf_core.digests import DigestFunction, available_algorithms, ensure_distinct
from bf_core.errors import InvalidArgumentError


def test_hashlib_digest_matches():
    assert DigestFunction("md5").digest(b"abc") == hashlib.md5(b"abc").digest()
    assert DigestFunction("sha512").digest(b"abc") == hashlib.sha512(b"abc").digest()


def test_seeded_digests_match_libraries():
    assert DigestFunction("xxh64", seed=7).digest(b"abc") == xxhash.xxh64(b"abc", seed=7).digest()
    assert DigestFunction("xxh3_128").digest(b"abc") == xxhash.xxh3_128(b"abc").digest()
    assert DigestFunction("murmur3_128", seed=3).digest(b"abc") == mmh3.hash_bytes(b"abc", 3)
    murmur32 = DigestFunction("murmur3_32").digest(b"abc")
    assert int.from_bytes(murmur32, "big") == mmh3.hash(b"abc", 0, signed=False)


def test_value_is_unsigned_big_endian_mod_size():
    raw = hashlib.sha1(b"payload").digest()
    assert DigestFunction("sha1").value(b"payload", 1000) == int.from_bytes(raw, "big") % 1000


def test_value_is_non_negative():
    # some of these digests start with a byte >= 0x80, negative if read as signed
    payloads = [str(i).encode() for i in range(200)]
    function = DigestFunction("md5")
    assert any(function.digest(p)[0] >= 0x80 for p in payloads)
    assert all(0 <= function.value(p, 97) < 97 for p in payloads)


def test_equality_by_configuration():
    assert DigestFunction("sha1") == DigestFunction("SHA1")
    assert hash(DigestFunction("sha1")) == hash(DigestFunction("sha1"))
    assert DigestFunction("xxh64", seed=1) != DigestFunction("xxh64", seed=2)
    assert DigestFunction("xxh64") != DigestFunction("xxh32")


def test_digest_function_is_immutable():
    function = DigestFunction("md5")
    with pytest.raises(AttributeError):
        function.algorithm = "sha1"


@pytest.mark.parametrize(
    "algorithm,seed",
    [("no-such-hash", 0), ("", 0), ("shake_128", 0), ("sha1", 5), ("xxh64", -1), ("xxh64", 1 << 32), ("xxh64", True)],
)
def test_invalid_configurations(algorithm, seed):
    with pytest.raises(InvalidArgumentError):
        DigestFunction(algorithm, seed)


def test_available_algorithms():
    names = available_algorithms()
    for name in ("murmur3_32", "murmur3_128", "xxh64", "xxh3_128", "md5", "sha1"):
        assert name in names
    assert not any(name.startswith("shake") for name in names)
    for name in names:
        DigestFunction(name)


def test_str():
    assert str(DigestFunction("sha1")) == "sha1"
    assert str(DigestFunction("xxh64", seed=9)) == "xxh64(seed=9)"


def test_ensure_distinct():
    ensure_distinct([DigestFunction("md5"), DigestFunction("sha1"), DigestFunction("xxh64")])
    with pytest.raises(InvalidArgumentError):
        ensure_distinct([DigestFunction("md5"), None])
    with pytest.raises(InvalidArgumentError):
        ensure_distinct([DigestFunction("md5"), DigestFunction("sha1"), DigestFunction("md5")])


def test_hashlib_names_are_canonical():
    assert DigestFunction("SHA-1") == DigestFunction("sha1")
    assert DigestFunction("SHA-1").algorithm == "sha1"
    assert DigestFunction("SHA-512").digest(b"abc") == hashlib.sha512(b"abc").digest()
