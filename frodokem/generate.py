"""Pseudo-random generation of the public matrix A and products with it."""

from __future__ import annotations

import hashlib
from typing import Iterable

import numpy as np
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from frodokem.params import FrodoParams, MatrixGenerator

_MASK16 = 0xFFFF


def _check_seed(params: FrodoParams, seed_a: bytes) -> bytes:
    seed = bytes(seed_a)
    if len(seed) != params.bytes_seed_a:
        raise ValueError(
            f"seed_A must be {params.bytes_seed_a} bytes, got {len(seed)}"
        )
    return seed


def _as_matrix(values: Iterable[int], rows: int, cols: int, label: str) -> np.ndarray:
    arr = np.asarray(values if isinstance(values, np.ndarray) else list(values))
    if arr.size != rows * cols:
        raise ValueError(
            f"{label} must hold {rows * cols} values, got {arr.size}"
        )
    return (arr.astype(np.int64).reshape(rows, cols)) & _MASK16


def _generate_aes(n: int, stripe_step: int, seed: bytes) -> np.ndarray:
    plain = np.zeros((n, n), dtype=np.uint16)
    plain[:, 0::stripe_step] = np.arange(n, dtype=np.uint16)[:, None]
    plain[:, 1::stripe_step] = np.arange(0, n, stripe_step, dtype=np.uint16)[None, :]
    encryptor = Cipher(algorithms.AES(seed), modes.ECB()).encryptor()
    data = encryptor.update(plain.astype("<u2").tobytes()) + encryptor.finalize()
    return np.frombuffer(data, dtype="<u2").reshape(n, n).astype(np.uint16)


def _generate_shake(n: int, seed: bytes) -> np.ndarray:
    data = b"".join(
        hashlib.shake_128(row.to_bytes(2, "little") + seed).digest(2 * n)
        for row in range(n)
    )
    return np.frombuffer(data, dtype="<u2").reshape(n, n).astype(np.uint16)


def generate_a(params: FrodoParams, seed_a: bytes) -> np.ndarray:
    """Expand ``seed_a`` into the N x N matrix A of 16-bit entries."""
    seed = _check_seed(params, seed_a)
    if params.generator is MatrixGenerator.AES128:
        return _generate_aes(params.n, params.stripe_step, seed)
    return _generate_shake(params.n, seed)


def mul_add_as_plus_e(
    params: FrodoParams, s: Iterable[int], e: Iterable[int], seed_a: bytes
) -> np.ndarray:
    """Compute A*S + E modulo 2^16.

    ``s`` holds S transposed (NBAR rows of N values) and ``e`` is N x NBAR,
    both flattened row by row. The result is N x NBAR, flattened.
    """
    n, nbar = params.n, params.nbar
    s_mat = _as_matrix(s, nbar, n, "s")
    e_mat = _as_matrix(e, n, nbar, "e")
    a = generate_a(params, seed_a).astype(np.int64)
    out = (a @ s_mat.T + e_mat) & _MASK16
    return out.astype(np.uint16).reshape(-1)


def mul_add_sa_plus_e(
    params: FrodoParams, s: Iterable[int], e: Iterable[int], seed_a: bytes
) -> np.ndarray:
    """Compute S'*A + E' modulo 2^16.

    ``s`` and ``e`` are NBAR x N, flattened row by row; so is the result.
    """
    n, nbar = params.n, params.nbar
    s_mat = _as_matrix(s, nbar, n, "s")
    e_mat = _as_matrix(e, nbar, n, "e")
    a = generate_a(params, seed_a).astype(np.int64)
    out = (s_mat @ a + e_mat) & _MASK16
    return out.astype(np.uint16).reshape(-1)