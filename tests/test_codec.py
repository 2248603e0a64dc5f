import pytest

from availprim.codec import (
    CodecError,
    Reader,
    blake2_256,
    encode_bytes,
    encode_compact,
    encode_u16,
    encode_u32,
    encode_u64,
)


@pytest.mark.parametrize(
    "value, hex_bytes",
    [
        (300, "b104"),
        (13851, "6dd8"),
        (96, "8101"),
        (1652112760001, "0bc11c98a98001"),
    ],
)
def test_compact_known_encodings(value, hex_bytes):
    assert encode_compact(value) == bytes.fromhex(hex_bytes)
    assert Reader(bytes.fromhex(hex_bytes)).read_compact() == value


@pytest.mark.parametrize(
    "value",
    [0, 1, 63, 64, 16383, 16384, 2**30 - 1, 2**30, 2**32 - 1, 2**64 - 1, 2**100],
)
def test_compact_round_trip(value):
    reader = Reader(encode_compact(value) + b"\xff")
    assert reader.read_compact() == value
    assert reader.remaining() == 1


def test_compact_lengths_by_mode():
    assert len(encode_compact(63)) == 1
    assert len(encode_compact(64)) == 2
    assert len(encode_compact(2**14 - 1)) == 2
    assert len(encode_compact(2**14)) == 4
    assert len(encode_compact(2**30 - 1)) == 4
    assert len(encode_compact(2**30)) == 5


def test_compact_rejects_negative():
    with pytest.raises(ValueError):
        encode_compact(-1)


def test_compact_rejects_non_canonical():
    with pytest.raises(CodecError):
        Reader(bytes([0x01, 0x00])).read_compact()


def test_read_past_end_raises():
    reader = Reader(b"\x01\x02")
    with pytest.raises(CodecError, match="Not enough data to fill buffer"):
        reader.read(3)


def test_big_compact_prefix_without_data_raises():
    with pytest.raises(CodecError):
        Reader(encode_compact(2**32 - 1)[:3]).read_compact()


def test_fixed_width_round_trip():
    data = encode_u16(1) + encode_u32(4_000_000_000) + encode_u64(2**64 - 1)
    reader = Reader(data)
    assert reader.read_u16() == 1
    assert reader.read_u32() == 4_000_000_000
    assert reader.read_u64() == 2**64 - 1
    assert reader.remaining() == 0


def test_u16_layout():
    assert encode_u16(1) == bytes.fromhex("0100")
    assert encode_u16(4) == bytes.fromhex("0400")


@pytest.mark.parametrize(
    "encoder, value",
    [(encode_u16, 2**16), (encode_u32, 2**32), (encode_u64, -1)],
)
def test_fixed_width_out_of_range(encoder, value):
    with pytest.raises(ValueError):
        encoder(value)


def test_bytes_round_trip():
    payload = bytes(range(200))
    encoded = encode_bytes(payload)
    reader = Reader(encoded)
    assert reader.read_bytes() == payload
    assert reader.remaining() == 0
    assert len(encoded) == len(encode_compact(200)) + 200


def test_read_byte_sequence():
    reader = Reader(b"\x07\x08")
    assert reader.read_byte() == 7
    assert reader.read_byte() == 8
    with pytest.raises(CodecError):
        reader.read_byte()


def test_blake2_256_properties():
    assert blake2_256(b"") == bytes.fromhex(
        "0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8"
    )
    assert len(blake2_256(b"abc")) == 32
    assert blake2_256(b"abc") == blake2_256(b"abc")
    assert blake2_256(b"abc") != blake2_256(b"abd")