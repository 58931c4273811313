"""Distributed point functions over base-k trees with full-domain evaluation.

A DPF splits the point function that maps one secret index to a message (and
every other index to zero) into two keys.  Evaluating both keys over the whole
domain gives two share vectors whose XOR is the point function.
"""

from __future__ import annotations

import secrets
from collections.abc import Sequence
from dataclasses import dataclass

from .extensions import extend_output
from .prf import PRF, PRFKeys, PRFKeysZ
from .utils import BLOCK_MASK, block_to_bytes, flip_lsb, get_digit, get_lsb

__all__ = [
    "DPFKey",
    "DPFKeyZ",
    "dpf_gen",
    "dpf_full_domain_eval",
    "dpf_gen_z",
    "dpf_full_domain_eval_z",
]

TERNARY = 3


def _random_block() -> int:
    return secrets.randbits(128)


def _check_key_shape(
    correction_words: tuple[tuple[int, ...], ...], output_cw: tuple[int, ...], base: int
) -> None:
    if len(correction_words) != base:
        raise ValueError(
            f"expected {base} rows of correction words, got {len(correction_words)}"
        )
    sizes = {len(row) for row in correction_words}
    if len(sizes) != 1 or 0 in sizes:
        raise ValueError("correction word rows must be non-empty and equally long")
    if not output_cw:
        raise ValueError("the output correction word must hold at least one block")


class _SerializableKey:
    """Shared byte layout: seed, correction words per branch, output correction word."""

    seed: int
    correction_words: tuple[tuple[int, ...], ...]
    output_cw: tuple[int, ...]

    @property
    def size(self) -> int:
        """The depth of the tree (number of digits of an index)."""
        return len(self.correction_words[0])

    @property
    def msg_len(self) -> int:
        """The number of 128-bit blocks of the message."""
        return len(self.output_cw)

    def to_bytes(self) -> bytes:
        """Serialise the key material as consecutive 16-byte little-endian blocks."""
        blocks = [self.seed]
        for row in self.correction_words:
            blocks.extend(row)
        blocks.extend(self.output_cw)
        return b"".join(block_to_bytes(block) for block in blocks)


@dataclass(frozen=True)
class DPFKey(_SerializableKey):
    """One party's key of a ternary DPF."""

    prf_keys: PRFKeys
    seed: int
    correction_words: tuple[tuple[int, ...], ...]
    output_cw: tuple[int, ...]

    def __post_init__(self) -> None:
        _check_key_shape(self.correction_words, self.output_cw, TERNARY)

    def to_bytes(self) -> bytes:
        """Serialise the key material as consecutive 16-byte little-endian blocks."""
        return super().to_bytes()


@dataclass(frozen=True)
class DPFKeyZ(_SerializableKey):
    """One party's key of a DPF over a base-k tree."""

    prf_keys_z: PRFKeysZ
    seed: int
    correction_words: tuple[tuple[int, ...], ...]
    output_cw: tuple[int, ...]

    def __post_init__(self) -> None:
        _check_key_shape(self.correction_words, self.output_cw, self.prf_keys_z.base)

    def to_bytes(self) -> bytes:
        """Serialise the key material as consecutive 16-byte little-endian blocks."""
        return super().to_bytes()


def _generate(
    branch_prfs: Sequence[PRF],
    ext_keys: PRFKeys | PRFKeysZ,
    domain_size: int,
    index: int,
    msg_blocks: Sequence[int],
) -> tuple[int, int, tuple[tuple[int, ...], ...], tuple[int, ...]]:
    """Build both seeds, the per-level correction words and the output correction."""
    base = len(branch_prfs)
    msg = list(msg_blocks)
    if domain_size < 1:
        raise ValueError(f"domain_size must be at least 1, got {domain_size}")
    if not 0 <= index < base**domain_size:
        raise ValueError(
            f"index {index} is outside a domain of {base}^{domain_size} points"
        )
    if not msg:
        raise ValueError("the message must hold at least one block")
    if any(not 0 <= block <= BLOCK_MASK for block in msg):
        raise ValueError("message blocks must be 128-bit values")

    seed_a = _random_block()
    seed_b = _random_block()
    # The on-path control bit must be 1 so the correction word gets applied.
    if get_lsb(seed_a ^ seed_b) == 0:
        seed_a = flip_lsb(seed_a)

    parent_a, parent_b = seed_a, seed_b
    levels: list[list[int]] = []
    for level in range(domain_size):
        s_a = [prf.eval(parent_a) for prf in branch_prfs]
        s_b = [prf.eval(parent_b) for prf in branch_prfs]

        # The on-path correction word is random so it looks like the others.
        r = _random_block()
        digit = get_digit(index, base, domain_size, level)
        if get_lsb(s_a[digit] ^ s_b[digit] ^ r) == 0:
            r = flip_lsb(r)

        levels.append(
            [r if j == digit else a ^ b for j, (a, b) in enumerate(zip(s_a, s_b))]
        )

        if get_lsb(parent_a) == 1:
            parent_a, parent_b = s_a[digit] ^ r, s_b[digit]
        else:
            parent_a, parent_b = s_a[digit], s_b[digit] ^ r

    correction_words = tuple(tuple(row) for row in zip(*levels))
    out_a = extend_output(ext_keys, [parent_a], len(msg))
    out_b = extend_output(ext_keys, [parent_b], len(msg))
    output_cw = tuple(a ^ b ^ m for a, b, m in zip(out_a, out_b, msg))
    return seed_a, seed_b, correction_words, output_cw


def _evaluate(
    branch_prfs: Sequence[PRF],
    ext_keys: PRFKeys | PRFKeysZ,
    key: _SerializableKey,
) -> list[tuple[int, ...]]:
    """Expand the whole tree and return the output share of every leaf."""
    nodes = [key.seed]
    for level in range(key.size):
        children: list[int] = []
        # Child j of node n lands at position j * len(nodes) + n.
        for prf, row in zip(branch_prfs, key.correction_words):
            cw = row[level]
            expanded = prf.batch_eval(nodes)
            children.extend(
                e ^ cw if get_lsb(parent) else e for e, parent in zip(expanded, nodes)
            )
        nodes = children

    msg_len = key.msg_len
    extended = extend_output(ext_keys, nodes, len(nodes) * msg_len)
    shares = []
    for leaf_pos, leaf in enumerate(nodes):
        chunk = extended[leaf_pos * msg_len : (leaf_pos + 1) * msg_len]
        if get_lsb(leaf):
            chunk = [value ^ cw for value, cw in zip(chunk, key.output_cw)]
        shares.append(tuple(chunk))
    return shares


def _ternary_prfs(prf_keys: PRFKeys) -> tuple[PRF, PRF, PRF]:
    return (prf_keys.prf_key0, prf_keys.prf_key1, prf_keys.prf_key2)


def dpf_gen(
    prf_keys: PRFKeys, domain_size: int, index: int, msg_blocks: Sequence[int]
) -> tuple[DPFKey, DPFKey]:
    """Split the point function ``index -> msg_blocks`` over 3^domain_size points."""
    seed_a, seed_b, cws, output_cw = _generate(
        _ternary_prfs(prf_keys), prf_keys, domain_size, index, msg_blocks
    )
    return (
        DPFKey(prf_keys, seed_a, cws, output_cw),
        DPFKey(prf_keys, seed_b, cws, output_cw),
    )


def dpf_full_domain_eval(key: DPFKey) -> list[tuple[int, ...]]:
    """Evaluate a ternary DPF key on every point; one tuple of blocks per point."""
    return _evaluate(_ternary_prfs(key.prf_keys), key.prf_keys, key)


def dpf_gen_z(
    base: int,
    prf_keys_z: PRFKeysZ,
    domain_size: int,
    index: int,
    msg_blocks: Sequence[int],
) -> tuple[DPFKeyZ, DPFKeyZ]:
    """Split the point function ``index -> msg_blocks`` over base^domain_size points."""
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    if base != prf_keys_z.base:
        raise ValueError(
            f"base {base} does not match the {prf_keys_z.base} branch keys given"
        )
    seed_a, seed_b, cws, output_cw = _generate(
        prf_keys_z.prf_key, prf_keys_z, domain_size, index, msg_blocks
    )
    return (
        DPFKeyZ(prf_keys_z, seed_a, cws, output_cw),
        DPFKeyZ(prf_keys_z, seed_b, cws, output_cw),
    )


def dpf_full_domain_eval_z(key: DPFKeyZ) -> list[tuple[int, ...]]:
    """Evaluate a base-k DPF key on every point; one tuple of blocks per point."""
    return _evaluate(key.prf_keys_z.prf_key, key.prf_keys_z, key)