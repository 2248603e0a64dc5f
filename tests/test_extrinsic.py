from dataclasses import dataclass

import pytest

from availprim.codec import (
    CodecError,
    Reader,
    blake2_256,
    encode_bytes,
    encode_compact,
    encode_u64,
)
from availprim.extrinsic import (
    AppUncheckedExtrinsic,
    BadProofError,
    CheckedExtrinsic,
    SignedPayload,
)

ACCOUNT = 0


@dataclass(frozen=True)
class FakeSig:
    signer: int
    msg: bytes


@dataclass(frozen=True)
class FakeExtra:
    def app_id(self):
        return 0


@dataclass(frozen=True)
class AppExtra:
    def app_id(self):
        return 7


@dataclass(frozen=True)
class ExtraWithAdditional:
    def additional_signed(self):
        return b"\x01"


def encode_signature(sig_tuple):
    address, sig, _extra = sig_tuple
    return encode_u64(address) + encode_u64(sig.signer) + encode_bytes(sig.msg)


def decode_signature(reader):
    address = reader.read_u64()
    signer = reader.read_u64()
    msg = reader.read_bytes()
    return (address, FakeSig(signer, msg), FakeExtra())


def encode_call(call):
    return encode_bytes(call)


def decode_call(reader):
    return reader.read_bytes()


def encode_extra(_extra):
    return b""


def identity_lookup(address):
    return address


def verify(sig, message, who):
    return sig.signer == who and sig.msg == message


def roundtrip(ux):
    encoded = ux.encode(encode_signature, encode_call)
    return AppUncheckedExtrinsic.decode(encoded, decode_signature, decode_call)


def test_unsigned_codec_should_work():
    ux = AppUncheckedExtrinsic.new_unsigned(b"")
    assert roundtrip(ux) == ux


def test_unsigned_encoding_bytes():
    ux = AppUncheckedExtrinsic.new_unsigned(b"")
    assert ux.encode(encode_signature, encode_call) == b"\x08\x04\x00"


def test_signed_codec_should_work():
    ux = AppUncheckedExtrinsic.new_signed(
        b"", ACCOUNT, FakeSig(ACCOUNT, encode_bytes(b"")), FakeExtra()
    )
    assert roundtrip(ux) == ux


def test_signed_encoding_sets_version_flag():
    ux = AppUncheckedExtrinsic.new_signed(
        b"", ACCOUNT, FakeSig(ACCOUNT, b""), FakeExtra()
    )
    encoded = ux.encode(encode_signature, encode_call)
    reader = Reader(encoded)
    assert reader.read_compact() == reader.remaining()
    assert reader.read_byte() == 0x84


def test_large_signed_codec_should_work():
    msg = blake2_256(encode_bytes(bytes(257)))
    ux = AppUncheckedExtrinsic.new_signed(
        b"", ACCOUNT, FakeSig(ACCOUNT, msg), FakeExtra()
    )
    assert roundtrip(ux) == ux


def test_unsigned_check_should_work():
    ux = AppUncheckedExtrinsic.new_unsigned(b"")
    assert not ux.is_signed()
    checked = ux.check(identity_lookup, verify, encode_call, encode_extra)
    assert checked == CheckedExtrinsic(signed=None, function=b"")


def test_badly_signed_check_should_fail():
    ux = AppUncheckedExtrinsic.new_signed(
        b"", ACCOUNT, FakeSig(ACCOUNT, b""), FakeExtra()
    )
    assert ux.is_signed()
    with pytest.raises(BadProofError):
        ux.check(identity_lookup, verify, encode_call, encode_extra)


def test_signed_check_should_work():
    ux = AppUncheckedExtrinsic.new_signed(
        b"", ACCOUNT, FakeSig(ACCOUNT, encode_bytes(b"")), FakeExtra()
    )
    assert ux.is_signed()
    checked = ux.check(identity_lookup, verify, encode_call, encode_extra)
    assert checked == CheckedExtrinsic(signed=(ACCOUNT, FakeExtra()), function=b"")


def test_large_payload_check_uses_hash():
    call = bytes(257)
    msg = blake2_256(encode_bytes(call))
    ux = AppUncheckedExtrinsic.new_signed(call, ACCOUNT, FakeSig(ACCOUNT, msg), FakeExtra())
    checked = ux.check(identity_lookup, verify, encode_call, encode_extra)
    assert checked.function == call
    assert checked.signed == (ACCOUNT, FakeExtra())


def test_check_includes_additional_signed():
    ux = AppUncheckedExtrinsic.new_signed(
        b"", ACCOUNT, FakeSig(ACCOUNT, b"\x00\x01"), ExtraWithAdditional()
    )
    checked = ux.check(identity_lookup, verify, encode_call, encode_extra)
    assert checked.signed == (ACCOUNT, ExtraWithAdditional())


def test_check_uses_lookup_result():
    ux = AppUncheckedExtrinsic.new_signed(b"", 5, FakeSig(50, b"\x00"), FakeExtra())
    checked = ux.check(lambda a: a * 10, verify, encode_call, encode_extra)
    assert checked.signed[0] == 50


def test_encoding_matches_vec():
    ux = AppUncheckedExtrinsic.new_unsigned(b"")
    encoded = ux.encode(encode_signature, encode_call)
    decoded = AppUncheckedExtrinsic.decode(Reader(encoded), decode_signature, decode_call)
    assert decoded == ux
    as_vec = Reader(encoded).read_bytes()
    assert encode_bytes(as_vec) == encoded


def test_large_bad_prefix_should_fail():
    encoded = encode_compact(2**32 - 1)
    with pytest.raises(CodecError, match="Not enough data to fill buffer"):
        AppUncheckedExtrinsic.decode(encoded, decode_signature, decode_call)


def test_invalid_version_is_rejected():
    with pytest.raises(CodecError, match="Invalid transaction version"):
        AppUncheckedExtrinsic.decode(b"\x08\x05\x00", decode_signature, decode_call)


def test_app_id_from_extra():
    signed = AppUncheckedExtrinsic.new_signed(b"", 1, FakeSig(1, b""), AppExtra())
    assert signed.app_id() == 7
    assert AppUncheckedExtrinsic.new_unsigned(b"").app_id() == 0


def test_signed_payload_small_is_not_hashed():
    payload = SignedPayload(b"", FakeExtra(), b"", encode_call, encode_extra)
    assert payload.encoded() == b"\x00"
    assert payload.signing_bytes() == b"\x00"


def test_signed_payload_at_limit_is_not_hashed():
    payload = SignedPayload(bytes(254), FakeExtra(), b"", encode_call, encode_extra)
    assert len(payload.encoded()) == 256
    assert payload.signing_bytes() == payload.encoded()


def test_signed_payload_over_limit_is_hashed():
    payload = SignedPayload(bytes(257), FakeExtra(), b"\x02", encode_call, encode_extra)
    assert len(payload.encoded()) == 260
    assert payload.signing_bytes() == blake2_256(payload.encoded())
    assert len(payload.signing_bytes()) == 32