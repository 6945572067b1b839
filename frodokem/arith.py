"""Small-matrix arithmetic and message encoding used by the KEM."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from frodokem.params import FrodoParams

_MASK16 = 0xFFFF


def _as_matrix(values: Iterable[int], rows: int, cols: int, label: str) -> np.ndarray:
    arr = np.asarray(values if isinstance(values, np.ndarray) else list(values))
    if arr.size != rows * cols:
        raise ValueError(f"{label} must hold {rows * cols} values, got {arr.size}")
    return arr.astype(np.int64).reshape(rows, cols) & _MASK16


def mul_bs(params: FrodoParams, b: Iterable[int], s: Iterable[int]) -> np.ndarray:
    """Compute B*S modulo q.

    ``b`` is NBAR x N and ``s`` holds S transposed (NBAR rows of N values),
    both flattened row by row. The result is NBAR x NBAR, flattened.
    """
    n, nbar = params.n, params.nbar
    b_mat = _as_matrix(b, nbar, n, "b")
    s_mat = _as_matrix(s, nbar, n, "s")
    out = (b_mat @ s_mat.T) & params.q_mask
    return out.astype(np.uint16).reshape(-1)


def mul_add_sb_plus_e(
    params: FrodoParams, b: Iterable[int], s: Iterable[int], e: Iterable[int]
) -> np.ndarray:
    """Compute S*B + E modulo q.

    ``b`` is N x NBAR, ``s`` is NBAR x N and ``e`` is NBAR x NBAR, all
    flattened row by row. The result is NBAR x NBAR, flattened.
    """
    n, nbar = params.n, params.nbar
    b_mat = _as_matrix(b, n, nbar, "b")
    s_mat = _as_matrix(s, nbar, n, "s")
    e_mat = _as_matrix(e, nbar, nbar, "e")
    out = (s_mat @ b_mat + e_mat) & params.q_mask
    return out.astype(np.uint16).reshape(-1)


def add(params: FrodoParams, a: Iterable[int], b: Iterable[int]) -> np.ndarray:
    """Add two NBAR x NBAR matrices modulo q."""
    nbar = params.nbar
    left = _as_matrix(a, nbar, nbar, "a")
    right = _as_matrix(b, nbar, nbar, "b")
    return ((left + right) & params.q_mask).astype(np.uint16).reshape(-1)


def sub(params: FrodoParams, a: Iterable[int], b: Iterable[int]) -> np.ndarray:
    """Subtract two NBAR x NBAR matrices modulo q."""
    nbar = params.nbar
    left = _as_matrix(a, nbar, nbar, "a")
    right = _as_matrix(b, nbar, nbar, "b")
    return ((left - right) & params.q_mask).astype(np.uint16).reshape(-1)


def key_encode(params: FrodoParams, mu: bytes) -> np.ndarray:
    """Encode the message ``mu`` as an NBAR x NBAR matrix.

    Every ``extracted_bits`` bytes, read little-endian, give eight entries of
    ``extracted_bits`` bits each, shifted to the top of the logq-bit range.
    """
    data = bytes(mu)
    if len(data) != params.bytes_mu:
        raise ValueError(f"mu must be {params.bytes_mu} bytes, got {len(data)}")
    bits = params.extracted_bits
    nwords = (params.nbar * params.nbar) // 8
    chunks = np.frombuffer(data, dtype=np.uint8).astype(np.int64).reshape(nwords, bits)
    words = chunks @ (1 << (8 * np.arange(bits, dtype=np.int64)))
    shifts = bits * np.arange(8, dtype=np.int64)
    pieces = (words[:, None] >> shifts) & ((1 << bits) - 1)
    out = pieces << (params.logq - bits)
    return out.astype(np.uint16).reshape(-1)


def key_decode(params: FrodoParams, w: Iterable[int]) -> bytes:
    """Recover the message from a noisy NBAR x NBAR matrix by rounding."""
    nbar = params.nbar
    bits = params.extracted_bits
    shift = params.logq - bits
    nwords = (nbar * nbar) // 8
    mat = _as_matrix(w, nbar, nbar, "w").reshape(nwords, 8)
    rounded = (((mat & params.q_mask) + (1 << (shift - 1))) >> shift) & ((1 << bits) - 1)
    words = (rounded << (bits * np.arange(8, dtype=np.int64))).sum(axis=1)
    return b"".join(int(word).to_bytes(bits, "little") for word in words)