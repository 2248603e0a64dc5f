"""Application ids and raw extrinsics tagged with them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from availprim.codec import Reader, encode_bytes, encode_u32

AppId = int


@dataclass
class AppExtrinsic:
    """Raw extrinsic bytes together with the application id they belong to."""

    app_id: AppId = 0
    data: bytes = b""

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    @classmethod
    def from_data(cls, data: bytes) -> "AppExtrinsic":
        """Wrap raw data with the default application id."""
        return cls(app_id=0, data=data)

    def encode(self) -> bytes:
        return encode_u32(self.app_id) + encode_bytes(self.data)

    @classmethod
    def decode(cls, reader: Reader) -> "AppExtrinsic":
        app_id = reader.read_u32()
        return cls(app_id=app_id, data=reader.read_bytes())


def get_app_id(obj: Any) -> AppId:
    """Return the application id carried by ``obj``, 0 when it has none.

    An 8-tuple of signed extensions yields the id of its last element.
    """
    if isinstance(obj, tuple):
        return get_app_id(obj[7]) if len(obj) == 8 else 0
    attr = getattr(obj, "app_id", None)
    if attr is None:
        return 0
    return attr() if callable(attr) else attr