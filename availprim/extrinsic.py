"""Unchecked extrinsics that carry an application id in their signed extensions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from availprim.app_id import AppId, get_app_id
from availprim.codec import CodecError, Reader, blake2_256, encode_compact

EXTRINSIC_VERSION = 4
_SIGNED_FLAG = 0b1000_0000
_VERSION_MASK = 0b0111_1111
_MAX_UNHASHED_PAYLOAD = 256

SignatureTuple = tuple[Any, Any, Any]


class BadProofError(ValueError):
    """The signature does not match the signed payload."""


def _additional_signed(extra: Any) -> bytes:
    """Encoded data the extension adds to the payload without storing it."""
    provider = getattr(extra, "additional_signed", None)
    if provider is None:
        return b""
    value = provider() if callable(provider) else provider
    return bytes(value)


@dataclass
class SignedPayload:
    """The call, extension and extra signed data that a signature covers."""

    call: Any
    extra: Any
    additional_signed: bytes
    encode_call: Callable[[Any], bytes] = field(repr=False, compare=False)
    encode_extra: Callable[[Any], bytes] = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        self.additional_signed = bytes(self.additional_signed)

    def encoded(self) -> bytes:
        """The plain concatenated encoding of call, extension and extra data."""
        return (
            bytes(self.encode_call(self.call))
            + bytes(self.encode_extra(self.extra))
            + self.additional_signed
        )

    def signing_bytes(self) -> bytes:
        """Bytes that are signed: payloads over 256 bytes are hashed first."""
        payload = self.encoded()
        if len(payload) > _MAX_UNHASHED_PAYLOAD:
            return blake2_256(payload)
        return payload


@dataclass
class CheckedExtrinsic:
    """An extrinsic whose signature, if any, has been verified."""

    signed: tuple[Any, Any] | None
    function: Any


@dataclass
class AppUncheckedExtrinsic:
    """An extrinsic from the outside world, possibly signed, not yet verified."""

    signature: SignatureTuple | None
    function: Any

    @classmethod
    def new_signed(
        cls, function: Any, address: Any, signature: Any, extra: Any
    ) -> "AppUncheckedExtrinsic":
        """A signed extrinsic, i.e. a transaction."""
        return cls(signature=(address, signature, extra), function=function)

    @classmethod
    def new_unsigned(cls, function: Any) -> "AppUncheckedExtrinsic":
        """An unsigned extrinsic, i.e. an inherent."""
        return cls(signature=None, function=function)

    def is_signed(self) -> bool:
        return self.signature is not None

    def app_id(self) -> AppId:
        """Application id of the signed extension; 0 when unsigned."""
        if self.signature is None:
            return 0
        return get_app_id(self.signature[2])

    def encode(
        self,
        encode_signature: Callable[[SignatureTuple], bytes],
        encode_call: Callable[[Any], bytes],
    ) -> bytes:
        """Encode as a length-prefixed byte vector.

        ``encode_signature`` receives the ``(address, signature, extra)`` tuple.
        """
        if self.signature is not None:
            body = bytes([EXTRINSIC_VERSION | _SIGNED_FLAG]) + bytes(
                encode_signature(self.signature)
            )
        else:
            body = bytes([EXTRINSIC_VERSION & _VERSION_MASK])
        body += bytes(encode_call(self.function))
        return encode_compact(len(body)) + body

    @classmethod
    def decode(
        cls,
        data: bytes | Reader,
        decode_signature: Callable[[Reader], SignatureTuple],
        decode_call: Callable[[Reader], Any],
    ) -> "AppUncheckedExtrinsic":
        """Decode from bytes or from a reader positioned at the length prefix."""
        reader = data if isinstance(data, Reader) else Reader(data)
        reader.read_compact()  # length prefix, kept for byte-vector compatibility
        version = reader.read_byte()
        is_signed = bool(version & _SIGNED_FLAG)
        if version & _VERSION_MASK != EXTRINSIC_VERSION:
            raise CodecError("Invalid transaction version")
        signature = tuple(decode_signature(reader)) if is_signed else None
        return cls(signature=signature, function=decode_call(reader))

    def check(
        self,
        lookup: Callable[[Any], Any],
        verify: Callable[[Any, bytes, Any], bool],
        encode_call: Callable[[Any], bytes],
        encode_extra: Callable[[Any], bytes],
    ) -> CheckedExtrinsic:
        """Resolve the signer and verify the signature.

        ``lookup`` maps an address to an account id; ``verify`` is called as
        ``verify(signature, message, account)``. Raises :class:`BadProofError`
        when the signature does not verify.
        """
        if self.signature is None:
            return CheckedExtrinsic(signed=None, function=self.function)
        address, signature, extra = self.signature
        account = lookup(address)
        payload = SignedPayload(
            call=self.function,
            extra=extra,
            additional_signed=_additional_signed(extra),
            encode_call=encode_call,
            encode_extra=encode_extra,
        )
        if not verify(signature, payload.signing_bytes(), account):
            raise BadProofError("bad proof: signature does not match payload")
        return CheckedExtrinsic(signed=(account, extra), function=self.function)