"""Bit packing of matrices and constant-time comparison helpers."""

from __future__ import annotations

from typing import Iterable

import numpy as np


def _check_lsb(lsb: int) -> None:
    if not 1 <= lsb <= 16:
        raise ValueError(f"lsb must be between 1 and 16, got {lsb}")


def pack(values: Iterable[int], lsb: int, outlen: int) -> bytes:
    """Pack the low ``lsb`` bits of each value, most significant bit first.

    The result is exactly ``outlen`` bytes: surplus input bits are dropped
    and missing bits are zero.
    """
    _check_lsb(lsb)
    if outlen < 0:
        raise ValueError("outlen must not be negative")
    vals = np.asarray(values if isinstance(values, np.ndarray) else list(values),
                      dtype=np.int64).reshape(-1)
    shifts = np.arange(lsb - 1, -1, -1, dtype=np.int64)
    bits = ((vals[:, None] >> shifts) & 1).astype(np.uint8).reshape(-1)
    total = outlen * 8
    if bits.size >= total:
        bits = bits[:total]
    else:
        bits = np.concatenate([bits, np.zeros(total - bits.size, dtype=np.uint8)])
    return np.packbits(bits).tobytes()


def unpack(data: bytes, lsb: int, count: int) -> np.ndarray:
    """Read ``count`` values of ``lsb`` bits each, most significant bit first.

    Missing input bits are taken as zero; surplus input is ignored.
    """
    _check_lsb(lsb)
    if count < 0:
        raise ValueError("count must not be negative")
    bits = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))
    total = count * lsb
    if bits.size >= total:
        bits = bits[:total]
    else:
        bits = np.concatenate([bits, np.zeros(total - bits.size, dtype=np.uint8)])
    weights = 1 << np.arange(lsb - 1, -1, -1, dtype=np.int64)
    return (bits.reshape(count, lsb).astype(np.int64) @ weights).astype(np.uint16)


def ct_verify(a: Iterable[int], b: Iterable[int]) -> int:
    """Return 0 if the two 16-bit sequences are equal and -1 otherwise."""
    left = np.asarray(a if isinstance(a, np.ndarray) else list(a), dtype=np.int64)
    right = np.asarray(b if isinstance(b, np.ndarray) else list(b), dtype=np.int64)
    if left.shape != right.shape:
        raise ValueError("sequences to compare must have the same length")
    diff = int(np.bitwise_or.reduce((left ^ right).reshape(-1) & 0xFFFF, initial=0))
    return -((diff | -diff) >> 63 & 1) if diff else 0


def ct_select(a: bytes, b: bytes, selector: int) -> bytes:
    """Return ``a`` when selector is 0 and ``b`` when selector is -1."""
    return bytes(
        ((~selector & x) | (selector & y)) & 0xFF
        for x, y in zip(a, b, strict=True)
    )