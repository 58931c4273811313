"""AES-based pseudorandom functions used to expand the DPF tree."""

from __future__ import annotations

import secrets
from collections.abc import Iterable
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .utils import BLOCK_SIZE, block_from_bytes, block_to_bytes


class PRF:
    """AES-128 in ECB mode with a Davies-Meyer feed-forward: F(x) = AES_k(x) ^ x."""

    __slots__ = ("_cipher",)

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != BLOCK_SIZE:
            raise ValueError(f"PRF key must be {BLOCK_SIZE} bytes, got {len(key)}")
        self._cipher = Cipher(algorithms.AES(key), modes.ECB())

    @classmethod
    def random(cls) -> PRF:
        """Return a PRF under a fresh random key."""
        return cls(secrets.token_bytes(BLOCK_SIZE))

    def eval(self, block: int) -> int:
        """Evaluate the PRF on one 128-bit block."""
        encrypted = self._cipher.encryptor().update(block_to_bytes(block))
        return block_from_bytes(encrypted) ^ block

    def batch_eval(self, blocks: Iterable[int]) -> list[int]:
        """Evaluate the PRF on each block, in order."""
        inputs = list(blocks)
        if not inputs:
            return []
        data = b"".join(block_to_bytes(b) for b in inputs)
        encrypted = self._cipher.encryptor().update(data)
        return [
            int.from_bytes(encrypted[pos : pos + BLOCK_SIZE], "little") ^ block
            for pos, block in zip(range(0, len(encrypted), BLOCK_SIZE), inputs)
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<key hidden>)"


@dataclass(frozen=True)
class PRFKeys:
    """One PRF per branch of a ternary tree plus one for output extension."""

    prf_key0: PRF
    prf_key1: PRF
    prf_key2: PRF
    prf_key_ext: PRF

    @classmethod
    def generate(cls) -> PRFKeys:
        """Create a set of independent random PRF keys."""
        return cls(PRF.random(), PRF.random(), PRF.random(), PRF.random())


@dataclass(frozen=True)
class PRFKeysZ:
    """One PRF per branch of a base-k tree plus one for output extension."""

    prf_key: tuple[PRF, ...]
    prf_key_ext: PRF

    @classmethod
    def generate(cls, base: int) -> PRFKeysZ:
        """Create ``base`` branch keys and an extension key, all random."""
        if base < 1:
            raise ValueError(f"base must be positive, got {base}")
        return cls(tuple(PRF.random() for _ in range(base)), PRF.random())

    @property
    def base(self) -> int:
        """The number of branches, one per branch key."""
        return len(self.prf_key)