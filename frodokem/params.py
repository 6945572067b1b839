"""Parameter sets for the FrodoKEM key encapsulation mechanism."""

from __future__ import annotations

import dataclasses
import enum
import hashlib
import re
from dataclasses import dataclass
from typing import Callable


class MatrixGenerator(enum.Enum):
    """Pseudo-random function used to expand the seed into the matrix A."""

    AES128 = "AES"
    SHAKE128 = "SHAKE"


@dataclass(frozen=True)
class FrodoParams:
    """One FrodoKEM parameter set together with the chosen matrix generator."""

    n: int
    logq: int
    extracted_bits: int
    crypto_bytes: int
    cdf_table: tuple[int, ...]
    shake: str
    generator: MatrixGenerator = MatrixGenerator.AES128
    nbar: int = 8
    stripe_step: int = 8
    bytes_seed_a: int = 16

    def __post_init__(self) -> None:
        if self.nbar % 8 != 0:
            raise ValueError("FrodoKEM assumes nbar is a multiple of 8")
        if self.shake not in ("shake128", "shake256"):
            raise ValueError(f"unknown SHAKE variant: {self.shake!r}")
        if not self.cdf_table:
            raise ValueError("the CDF table must not be empty")

    def with_generator(self, generator: MatrixGenerator | str) -> FrodoParams:
        """Return a copy of this parameter set using another matrix generator."""
        if not isinstance(generator, MatrixGenerator):
            generator = _parse_generator(str(generator))
        return dataclasses.replace(self, generator=generator)

    @property
    def name(self) -> str:
        return f"FrodoKEM-{self.n}"

    @property
    def full_name(self) -> str:
        return f"{self.name}-{self.generator.value}"

    @property
    def q(self) -> int:
        return 1 << self.logq

    @property
    def q_mask(self) -> int:
        return self.q - 1

    @property
    def bytes_mu(self) -> int:
        return (self.extracted_bits * self.nbar * self.nbar) // 8

    @property
    def bytes_salt(self) -> int:
        return 2 * self.crypto_bytes

    @property
    def bytes_seed_se(self) -> int:
        return 2 * self.crypto_bytes

    @property
    def bytes_pkhash(self) -> int:
        return self.crypto_bytes

    @property
    def packed_b_bytes(self) -> int:
        """Size of the packed N x NBAR matrix."""
        return (self.logq * self.n * self.nbar) // 8

    @property
    def packed_c_bytes(self) -> int:
        """Size of the packed NBAR x NBAR matrix."""
        return (self.logq * self.nbar * self.nbar) // 8

    @property
    def public_key_bytes(self) -> int:
        return self.bytes_seed_a + self.packed_b_bytes

    @property
    def secret_key_bytes(self) -> int:
        return (
            self.crypto_bytes
            + self.public_key_bytes
            + 2 * self.n * self.nbar
            + self.bytes_pkhash
        )

    @property
    def ciphertext_bytes(self) -> int:
        return self.packed_b_bytes + self.packed_c_bytes + self.bytes_salt

    @property
    def shared_secret_bytes(self) -> int:
        return self.crypto_bytes

    @property
    def shake_function(self) -> Callable[..., "hashlib._Hash"]:
        """The hashlib constructor for the SHAKE variant of this set."""
        return hashlib.shake_128 if self.shake == "shake128" else hashlib.shake_256


_BASE_PARAMS = {
    640: FrodoParams(
        n=640,
        logq=15,
        extracted_bits=2,
        crypto_bytes=16,
        cdf_table=(4643, 13363, 20579, 25843, 29227, 31145, 32103,
                   32525, 32689, 32745, 32762, 32766, 32767),
        shake="shake128",
    ),
    976: FrodoParams(
        n=976,
        logq=16,
        extracted_bits=3,
        crypto_bytes=24,
        cdf_table=(5638, 15915, 23689, 28571, 31116, 32217, 32613,
                   32731, 32760, 32766, 32767),
        shake="shake256",
    ),
    1344: FrodoParams(
        n=1344,
        logq=16,
        extracted_bits=4,
        crypto_bytes=32,
        cdf_table=(9142, 23462, 30338, 32361, 32725, 32765, 32767),
        shake="shake256",
    ),
}

_NAME_PATTERN = re.compile(
    r"^(?:frodokem-?|frodo)?(\d+)(?:-(aes|aes128|shake|shake128))?$"
)


def _parse_generator(text: str) -> MatrixGenerator:
    key = text.strip().lower()
    if key in ("aes", "aes128"):
        return MatrixGenerator.AES128
    if key in ("shake", "shake128"):
        return MatrixGenerator.SHAKE128
    raise ValueError(f"unknown matrix generator: {text!r}")


def get_params(name: str) -> FrodoParams:
    """Look up a parameter set such as 'FrodoKEM-640' or 'FrodoKEM-976-SHAKE'.

    Without a generator suffix the AES128 generator is used.
    """
    match = _NAME_PATTERN.match(name.strip().lower())
    if match is None:
        raise ValueError(f"unknown FrodoKEM parameter set: {name!r}")
    size = int(match.group(1))
    try:
        params = _BASE_PARAMS[size]
    except KeyError:
        raise ValueError(f"unknown FrodoKEM parameter set: {name!r}") from None
    if match.group(2):
        params = params.with_generator(_parse_generator(match.group(2)))
    return params