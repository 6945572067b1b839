# frodokem

The building blocks of FrodoKEM, the key encapsulation mechanism based on
the plain learning-with-errors problem, written in Python with numpy. It
covers the FrodoKEM-640, FrodoKEM-976 and FrodoKEM-1344 parameter sets. The
public matrix `A` can be expanded from its seed with AES-128 or with
SHAKE128.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Modules

### `frodokem.params`

`get_params(name)` returns a frozen `FrodoParams` dataclass. It accepts
names such as `"FrodoKEM-640"`, `"FrodoKEM-976-SHAKE"` or
`"frodo1344-aes"`. Without a suffix the AES-128 generator is used. An
unknown name raises `ValueError`.

A `FrodoParams` carries the dimensions (`n`, `nbar`, `logq`,
`extracted_bits`), the noise CDF table and the SHAKE variant. It also
derives the byte sizes of the scheme, including `public_key_bytes`,
`secret_key_bytes`, `ciphertext_bytes`, `shared_secret_bytes`, `bytes_mu`,
`bytes_salt` and `bytes_seed_se`. `shake_function` is the matching
`hashlib` constructor.

`with_generator(generator)` returns a copy that uses another member of
`MatrixGenerator` (`AES128` or `SHAKE128`). You may also pass one of the
strings `"aes"` or `"shake"`.

```python
from frodokem.params import MatrixGenerator, get_params

params = get_params("FrodoKEM-640")
print(params.full_name)           # FrodoKEM-640-AES
print(params.ciphertext_bytes)    # 9752
shake_params = params.with_generator(MatrixGenerator.SHAKE128)
```

### `frodokem.noise`

`sample_noise(values, cdf_table)` maps 16-bit pseudo-random values to
samples of the error distribution. The low bit of each value gives the
sign, and the remaining 15 bits are compared with the CDF table. The
samples come back as 16-bit two's complement values in a `uint16` array.

### `frodokem.packing`

- `pack(values, lsb, outlen)`: packs the low `lsb` bits of each value,
  most significant bit first, into exactly `outlen` bytes.
- `unpack(data, lsb, count)`: reads `count` values of `lsb` bits each.
- `ct_verify(a, b)`: returns `0` for equal sequences and `-1` otherwise.
- `ct_select(a, b, selector)`: returns `a` for selector `0` and `b` for
  selector `-1`.

```python
from frodokem.packing import pack, unpack

packed = pack([1, 2, 3, 4, 5, 6, 7, 8], lsb=15, outlen=15)
assert list(unpack(packed, lsb=15, count=8)) == [1, 2, 3, 4, 5, 6, 7, 8]
```

### `frodokem.generate`

- `generate_a(params, seed_a)`: expands a 16-byte seed into the N x N
  matrix `A`.
- `mul_add_as_plus_e(params, s, e, seed_a)`: computes `A*S + E` modulo
  2^16.
- `mul_add_sa_plus_e(params, s, e, seed_a)`: computes `S'*A + E'` modulo
  2^16.

Matrices are given and returned flattened row by row. The docstrings state
each shape.

### `frodokem.arith`

- `mul_bs(params, b, s)` and `mul_add_sb_plus_e(params, b, s, e)`:
  products of the small matrices, reduced modulo q.
- `add(params, a, b)` and `sub(params, a, b)`: NBAR x NBAR matrix sums
  and differences modulo q.
- `key_encode(params, mu)` and `key_decode(params, w)`: map a `bytes_mu`
  byte message to an NBAR x NBAR matrix and back, rounding away small
  noise.

```python
from frodokem.arith import add, key_decode, key_encode
from frodokem.params import get_params

params = get_params("FrodoKEM-976")
mu = bytes(range(params.bytes_mu))
noisy = add(params, key_encode(params, mu), [3] * 64)
assert key_decode(params, noisy) == mu
```

## What this package does not do

The package stops at these building blocks. It has no function that
generates a key pair, encapsulates a shared secret or decapsulates a
ciphertext, so it cannot yet be used as a complete KEM. It also provides no
command-line tool.

Speed is not a goal. Generating `A` and multiplying by it for the larger
parameter sets takes a noticeable fraction of a second.