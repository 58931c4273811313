"""Output extension: stretch each leaf seed into several pseudorandom blocks."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .prf import PRF


class _HasExtensionKey(Protocol):
    prf_key_ext: PRF


def extend_output(
    prf_keys: _HasExtensionKey, output: Sequence[int], new_output_size: int
) -> list[int]:
    """Expand ``output`` to ``new_output_size`` blocks with the extension PRF.

    Each input block ``x`` becomes ``factor`` consecutive blocks
    ``F(x ^ 0), F(x ^ 1), ...`` where ``factor = new_output_size / len(output)``.
    """
    output_size = len(output)
    if output_size == 0:
        raise ValueError("output must hold at least one block")
    if new_output_size % output_size != 0:
        raise ValueError("new_output_size needs to be a multiple of output_size")
    if new_output_size < output_size:
        raise ValueError("new_output_size < output_size")

    factor = new_output_size // output_size
    seeds = [block ^ j for block in output for j in range(factor)]
    return prf_keys.prf_key_ext.batch_eval(seeds)