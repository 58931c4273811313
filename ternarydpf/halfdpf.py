"""Ternary DPF whose third child is derived from the parent and its siblings.

Each node is expanded with two PRF calls only.  The third child is
``x ^ F0(x) ^ F1(x)``, which saves a third of the AES work during full-domain
evaluation.  Keys have the same layout as those of the plain ternary DPF.
"""

from __future__ import annotations

import secrets
from collections.abc import Sequence

from .dpf import DPFKey
from .extensions import extend_output
from .prf import PRFKeys
from .utils import BLOCK_MASK, flip_lsb, get_lsb, get_trit

__all__ = ["half_dpf_gen", "half_dpf_full_domain_eval"]


def _random_block() -> int:
    return secrets.randbits(128)


def _expand(prf_keys: PRFKeys, parent: int) -> tuple[int, int, int]:
    """Return the three uncorrected children of one node."""
    s0 = prf_keys.prf_key0.eval(parent)
    s1 = prf_keys.prf_key1.eval(parent)
    return s0, s1, s0 ^ s1 ^ parent


def half_dpf_gen(
    prf_keys: PRFKeys, domain_size: int, index: int, msg_blocks: Sequence[int]
) -> tuple[DPFKey, DPFKey]:
    """Split the point function ``index -> msg_blocks`` over 3^domain_size points."""
    msg = list(msg_blocks)
    if domain_size < 1:
        raise ValueError(f"domain_size must be at least 1, got {domain_size}")
    if not 0 <= index < 3**domain_size:
        raise ValueError(f"index {index} is outside a domain of 3^{domain_size} points")
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
        s_a = _expand(prf_keys, parent_a)
        s_b = _expand(prf_keys, parent_b)

        # The on-path correction word is random so it looks like the others.
        r = _random_block()
        trit = get_trit(index, domain_size, level)
        if get_lsb(s_a[trit] ^ s_b[trit] ^ r) == 0:
            r = flip_lsb(r)

        levels.append(
            [r if j == trit else a ^ b for j, (a, b) in enumerate(zip(s_a, s_b))]
        )

        if get_lsb(parent_a) == 1:
            parent_a, parent_b = s_a[trit] ^ r, s_b[trit]
        else:
            parent_a, parent_b = s_a[trit], s_b[trit] ^ r

    correction_words = tuple(tuple(row) for row in zip(*levels))
    out_a = extend_output(prf_keys, [parent_a], len(msg))
    out_b = extend_output(prf_keys, [parent_b], len(msg))
    output_cw = tuple(a ^ b ^ m for a, b, m in zip(out_a, out_b, msg))
    return (
        DPFKey(prf_keys, seed_a, correction_words, output_cw),
        DPFKey(prf_keys, seed_b, correction_words, output_cw),
    )


def half_dpf_full_domain_eval(key: DPFKey) -> list[tuple[int, ...]]:
    """Evaluate a half-DPF key on every point; one tuple of blocks per point."""
    prf_keys = key.prf_keys
    cw0_row, cw1_row, cw2_row = key.correction_words
    nodes = [key.seed]
    for level in range(key.size):
        cw0, cw1, cw2 = cw0_row[level], cw1_row[level], cw2_row[level]
        first = prf_keys.prf_key0.batch_eval(nodes)
        second = prf_keys.prf_key1.batch_eval(nodes)
        children0: list[int] = []
        children1: list[int] = []
        children2: list[int] = []
        for parent, a, b in zip(nodes, first, second):
            third = parent ^ a ^ b
            if get_lsb(parent):
                a ^= cw0
                b ^= cw1
                third ^= cw2
            children0.append(a)
            children1.append(b)
            children2.append(third)
        # Child j of node n lands at position j * len(nodes) + n.
        nodes = children0 + children1 + children2

    msg_len = key.msg_len
    extended = extend_output(prf_keys, nodes, len(nodes) * msg_len)
    shares = []
    for leaf_pos, leaf in enumerate(nodes):
        chunk = extended[leaf_pos * msg_len : (leaf_pos + 1) * msg_len]
        if get_lsb(leaf):
            chunk = [value ^ cw for value, cw in zip(chunk, key.output_cw)]
        shares.append(tuple(chunk))
    return shares