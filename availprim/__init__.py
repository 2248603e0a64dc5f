"""Data-availability chain primitives: codec, headers, commitments, extrinsics and signing helpers."""

__version__ = "0.1.0"