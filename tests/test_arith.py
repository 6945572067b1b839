import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from frodokem.arith import (
    add,
    key_decode,
    key_encode,
    mul_add_sb_plus_e,
    mul_bs,
    sub,
)
from frodokem.params import get_params

ALL_PARAMS = [get_params(name) for name in ("FrodoKEM-640", "FrodoKEM-976", "FrodoKEM-1344")]
P640 = get_params("FrodoKEM-640")


def _random_matrix(rng, size):
    return rng.integers(0, 1 << 16, size=size, dtype=np.int64)


@pytest.mark.parametrize("params", ALL_PARAMS, ids=lambda p: p.name)
def test_key_encode_decode_round_trip(params):
    rng = np.random.default_rng(1)
    mu = bytes(rng.integers(0, 256, size=params.bytes_mu, dtype=np.int64).tolist())
    encoded = key_encode(params, mu)
    assert encoded.shape == (params.nbar * params.nbar,)
    assert key_decode(params, encoded) == mu


@pytest.mark.parametrize("params", ALL_PARAMS, ids=lambda p: p.name)
def test_key_decode_tolerates_small_noise(params):
    rng = np.random.default_rng(2)
    mu = bytes(rng.integers(0, 256, size=params.bytes_mu, dtype=np.int64).tolist())
    encoded = key_encode(params, mu).astype(np.int64)
    limit = 1 << (params.logq - params.extracted_bits - 1)
    noise = rng.integers(-limit + 1, limit, size=encoded.size, dtype=np.int64)
    noisy = (encoded + noise) & params.q_mask
    assert key_decode(params, noisy) == mu


def test_key_encode_places_bits_at_top():
    mu = bytes([0x01]) + bytes(P640.bytes_mu - 1)
    encoded = key_encode(P640, mu)
    assert int(encoded[0]) == 1 << (P640.logq - P640.extracted_bits)
    assert not encoded[1:].any()


def test_key_encode_all_ones():
    encoded = key_encode(P640, b"\xff" * P640.bytes_mu)
    assert set(encoded.tolist()) == {24576}


def test_key_encode_rejects_wrong_length():
    with pytest.raises(ValueError):
        key_encode(P640, bytes(P640.bytes_mu + 1))


def test_key_decode_rejects_wrong_size():
    with pytest.raises(ValueError):
        key_decode(P640, [0] * 10)


@settings(max_examples=25, deadline=None)
@given(st.lists(st.integers(0, 0xFFFF), min_size=64, max_size=64),
       st.lists(st.integers(0, 0xFFFF), min_size=64, max_size=64))
def test_add_then_sub_returns_original(a, b):
    total = add(P640, a, b)
    back = sub(P640, total, b)
    assert back.tolist() == [x & P640.q_mask for x in a]


def test_sub_wraps_modulo_q():
    zero = [0] * 64
    one = [1] * 64
    assert sub(P640, zero, one).tolist() == [P640.q_mask] * 64


def test_add_rejects_wrong_size():
    with pytest.raises(ValueError):
        add(P640, [0] * 63, [0] * 64)


@pytest.mark.parametrize("params", ALL_PARAMS, ids=lambda p: p.name)
def test_mul_bs_with_zero_s_is_zero(params):
    rng = np.random.default_rng(3)
    b = _random_matrix(rng, params.nbar * params.n)
    out = mul_bs(params, b, np.zeros(params.nbar * params.n, dtype=np.int64))
    assert not out.any()


def test_mul_bs_selects_columns_with_unit_rows():
    params = P640
    n, nbar = params.n, params.nbar
    rng = np.random.default_rng(4)
    b = _random_matrix(rng, nbar * n).reshape(nbar, n)
    s = np.zeros((nbar, n), dtype=np.int64)
    for j in range(nbar):
        s[j, j] = 1
    out = mul_bs(params, b.reshape(-1), s.reshape(-1)).reshape(nbar, nbar)
    assert np.array_equal(out, b[:, :nbar] & params.q_mask)


def test_mul_bs_treats_s_as_signed():
    params = P640
    n, nbar = params.n, params.nbar
    rng = np.random.default_rng(5)
    b = _random_matrix(rng, nbar * n).reshape(nbar, n)
    s = np.zeros((nbar, n), dtype=np.int64)
    s[:, 0] = 0xFFFF  # -1 in 16-bit two's complement
    out = mul_bs(params, b.reshape(-1), s.reshape(-1)).reshape(nbar, nbar)
    expected_col = (-b[:, 0]) & params.q_mask
    for j in range(nbar):
        assert np.array_equal(out[:, j], expected_col)


@pytest.mark.parametrize("params", ALL_PARAMS, ids=lambda p: p.name)
def test_mul_add_sb_plus_e_zero_s_returns_e(params):
    rng = np.random.default_rng(6)
    b = _random_matrix(rng, params.n * params.nbar)
    e = _random_matrix(rng, params.nbar * params.nbar)
    s = np.zeros(params.nbar * params.n, dtype=np.int64)
    out = mul_add_sb_plus_e(params, b, s, e)
    assert np.array_equal(out, e & params.q_mask)


@pytest.mark.parametrize("params", ALL_PARAMS, ids=lambda p: p.name)
def test_mul_add_sb_plus_e_agrees_with_mul_bs(params):
    n, nbar = params.n, params.nbar
    rng = np.random.default_rng(7)
    left = _random_matrix(rng, nbar * n).reshape(nbar, n)
    right = _random_matrix(rng, nbar * n).reshape(nbar, n)
    via_bs = mul_bs(params, left.reshape(-1), right.reshape(-1))
    via_sb = mul_add_sb_plus_e(
        params, right.T.reshape(-1), left.reshape(-1), np.zeros(nbar * nbar, dtype=np.int64)
    )
    assert np.array_equal(via_bs, via_sb)


def test_mul_add_sb_plus_e_results_below_q():
    params = P640
    rng = np.random.default_rng(8)
    out = mul_add_sb_plus_e(
        params,
        _random_matrix(rng, params.n * params.nbar),
        _random_matrix(rng, params.nbar * params.n),
        _random_matrix(rng, params.nbar * params.nbar),
    )
    assert int(out.max()) <= params.q_mask


def test_mul_add_sb_plus_e_rejects_wrong_size():
    params = P640
    with pytest.raises(ValueError):
        mul_add_sb_plus_e(params, [0] * 5, [0] * (params.nbar * params.n), [0] * 64)


def test_mul_bs_rejects_wrong_size():
    with pytest.raises(ValueError):
        mul_bs(P640, [0] * 3, [0] * (P640.nbar * P640.n))