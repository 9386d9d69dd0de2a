import pytest

from motor.utils import (
    MotorError,
    binary_to_hex,
    compress_data,
    decompress_data,
    hash_sha1,
    hex_to_binary,
    split_string,
    trim_string,
)


def test_sha1_known_digests():
    assert hash_sha1(b"") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
    assert hash_sha1(b"abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_sha1_accepts_text():
    assert hash_sha1("abc") == hash_sha1(b"abc")
    assert len(hash_sha1("anything")) == 40


@pytest.mark.parametrize("data", [b"", b"hello", b"\x00" * 1000, bytes(range(256)) * 10])
def test_zlib_round_trip(data):
    assert decompress_data(compress_data(data)) == data


def test_zlib_stream_header():
    assert compress_data(b"payload")[0] == 0x78


def test_decompress_garbage_raises():
    with pytest.raises(MotorError):
        decompress_data(b"not a zlib stream")


def test_decompress_truncated_raises():
    packed = compress_data(b"some data to squeeze" * 10)
    with pytest.raises(MotorError):
        decompress_data(packed[:-4])


def test_binary_to_hex_pads():
    assert binary_to_hex(b"\x00\xff\x0a") == "00ff0a"


@pytest.mark.parametrize("data", [b"", b"\x01\x02", bytes(range(256))])
def test_hex_round_trip(data):
    assert hex_to_binary(binary_to_hex(data)) == data


def test_hex_to_binary_invalid():
    with pytest.raises(ValueError):
        hex_to_binary("zz")


def test_split_string_basic():
    assert split_string("a,b,c", ",") == ["a", "b", "c"]


def test_split_string_drops_trailing_empty_field():
    assert split_string("a,b,", ",") == ["a", "b"]
    assert split_string("a,,", ",") == ["a", ""]
    assert split_string(",a", ",") == ["", "a"]
    assert split_string("", ",") == []


def test_trim_string():
    assert trim_string("  x y \t\n") == "x y"
    assert trim_string(" \t ") == ""
    assert trim_string("abc") == "abc"