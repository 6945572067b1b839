"""Sampling from the FrodoKEM error distribution."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np


def sample_noise(values: Iterable[int], cdf_table: Sequence[int]) -> np.ndarray:
    """Turn 16-bit pseudo-random values into samples of the noise distribution.

    The low bit of each value selects the sign; the remaining 15 bits are
    compared against the CDF table. Results are 16-bit two's complement.
    """
    rnd = np.asarray(list(values) if not isinstance(values, np.ndarray) else values)
    rnd = (rnd.astype(np.int64) & 0xFFFF).astype(np.uint16)
    prnd = (rnd >> 1).astype(np.int64)
    sign = (rnd & 1).astype(bool)

    sample = np.zeros(rnd.shape, dtype=np.int64)
    for bound in tuple(cdf_table)[:-1]:
        sample += prnd > int(bound)

    signed = np.where(sign, -sample, sample)
    return (signed & 0xFFFF).astype(np.uint16)