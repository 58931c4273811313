"""Correctness trials and benchmarks for the DPF constructions."""

from __future__ import annotations

import argparse
import random
import secrets
import time
from collections.abc import Callable, Sequence

from .dpf import dpf_full_domain_eval, dpf_full_domain_eval_z, dpf_gen, dpf_gen_z
from .halfdpf import half_dpf_full_domain_eval, half_dpf_gen
from .prf import PRFKeys, PRFKeysZ
from .utils import block_hex

__all__ = [
    "CorrectnessError",
    "check_output_correctness",
    "run_dpf_trial",
    "run_half_dpf_trial",
    "run_dpf_z_trial",
    "benchmark_gen",
    "benchmark_aes",
    "main",
]

FULL_EVAL_DOMAIN = 8
MESSAGE_SIZE = 2
Z_BASE = 7
TEST_TRIALS = 3

_RULE = "*" * 42


class CorrectnessError(AssertionError):
    """Raised when two output share vectors do not reconstruct the point function."""


def _elapsed_ms(start: float) -> float:
    return (time.process_time() - start) * 1000.0


def _random_message(msg_len: int) -> list[int]:
    return [secrets.randbits(128) for _ in range(msg_len)]


def check_output_correctness(
    shares0: Sequence[Sequence[int]],
    shares1: Sequence[Sequence[int]],
    secret_index: int,
    secret_msg: Sequence[int],
) -> tuple[int, ...]:
    """Check that the shares XOR to ``secret_msg`` at ``secret_index`` and zero elsewhere.

    Returns the message reconstructed at the secret index.
    """
    if len(shares0) != len(shares1):
        raise ValueError(
            f"share vectors differ in length: {len(shares0)} and {len(shares1)}"
        )
    if not 0 <= secret_index < len(shares0):
        raise IndexError(f"secret index {secret_index} is outside {len(shares0)} outputs")

    expected = tuple(secret_msg)
    recovered = tuple(a ^ b for a, b in zip(shares0[secret_index], shares1[secret_index]))
    if recovered != expected:
        raise CorrectnessError("FAIL (wrong message)")

    for position, (leaf_a, leaf_b) in enumerate(zip(shares0, shares1)):
        if position == secret_index:
            continue
        for share_a, share_b in zip(leaf_a, leaf_b):
            if share_a ^ share_b:
                raise CorrectnessError(
                    f"FAIL (non-zero) {position}\n{block_hex(share_a)}\n{block_hex(share_b)}"
                )
    return recovered


def _timed_trial(
    gen: Callable[[Sequence[int]], tuple[object, object]],
    evaluate: Callable[[object], list[tuple[int, ...]]],
    secret_index: int,
    msg_len: int,
) -> float:
    secret_msg = _random_message(msg_len)
    key_a, key_b = gen(secret_msg)

    shares0 = evaluate(key_a)
    start = time.process_time()
    shares1 = evaluate(key_b)
    elapsed = _elapsed_ms(start)
    print(f"Time {elapsed:f} ms")

    check_output_correctness(shares0, shares1, secret_index, secret_msg)
    return elapsed


def run_dpf_trial(size: int = FULL_EVAL_DOMAIN, msg_len: int = MESSAGE_SIZE) -> float:
    """Check a ternary DPF at a random index; return the evaluation time in ms."""
    secret_index = random.randrange(3**size)
    prf_keys = PRFKeys.generate()
    return _timed_trial(
        lambda msg: dpf_gen(prf_keys, size, secret_index, msg),
        dpf_full_domain_eval,
        secret_index,
        msg_len,
    )


def run_half_dpf_trial(
    size: int = FULL_EVAL_DOMAIN, msg_len: int = MESSAGE_SIZE
) -> float:
    """Check a half-DPF at index 0; return the evaluation time in ms."""
    secret_index = 0
    prf_keys = PRFKeys.generate()
    return _timed_trial(
        lambda msg: half_dpf_gen(prf_keys, size, secret_index, msg),
        half_dpf_full_domain_eval,
        secret_index,
        msg_len,
    )


def run_dpf_z_trial(
    base: int = Z_BASE, size: int = FULL_EVAL_DOMAIN, msg_len: int = MESSAGE_SIZE
) -> float:
    """Check a base-``base`` DPF at a random index; return the evaluation time in ms."""
    secret_index = random.randrange(base**size)
    print(f"secret_index={secret_index}")
    prf_keys_z = PRFKeysZ.generate(base)
    return _timed_trial(
        lambda msg: dpf_gen_z(base, prf_keys_z, size, secret_index, msg),
        dpf_full_domain_eval_z,
        secret_index,
        msg_len,
    )


def benchmark_gen(size: int = FULL_EVAL_DOMAIN) -> float:
    """Time key generation for a one-block message; return milliseconds."""
    secret_index = random.randrange(3**size)
    secret_msg = _random_message(1)
    prf_keys = PRFKeys.generate()

    start = time.process_time()
    dpf_gen(prf_keys, size, secret_index, secret_msg)
    elapsed = _elapsed_ms(start)
    print(f"Time {elapsed:f} ms")
    return elapsed


def benchmark_aes(size: int = FULL_EVAL_DOMAIN, msg_len: int = MESSAGE_SIZE) -> float:
    """Time the AES work of a full-domain evaluation; return milliseconds."""
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    if msg_len < 1:
        raise ValueError(f"msg_len must be at least 1, got {msg_len}")
    prf_keys = PRFKeys.generate()
    total = 3**size * msg_len

    # Pseudorandom input so the timing is realistic.
    data_in = prf_keys.prf_key0.batch_eval(range(total))
    data_out = [0] * total

    start = time.process_time()
    num_nodes = 1
    for _ in range(size):
        parents = data_in[:num_nodes]
        data_out[:num_nodes] = prf_keys.prf_key0.batch_eval(parents)
        data_out[num_nodes : 2 * num_nodes] = prf_keys.prf_key1.batch_eval(parents)
        data_out[2 * num_nodes : 3 * num_nodes] = prf_keys.prf_key2.batch_eval(parents)
        data_in, data_out = data_out, data_in
        num_nodes *= 3

    # AES part of the output extension.
    data_out[: num_nodes * msg_len] = prf_keys.prf_key0.batch_eval(
        data_in[: num_nodes * msg_len]
    )
    elapsed = _elapsed_ms(start)
    print(f"Time {elapsed:f} ms")
    return elapsed


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ternarydpf",
        description="Run correctness trials and benchmarks of the DPF constructions.",
    )
    parser.add_argument("--trials", type=_positive_int, default=TEST_TRIALS)
    parser.add_argument("--size", type=_positive_int, default=FULL_EVAL_DOMAIN,
                        help="tree depth; the domain has base^size points")
    parser.add_argument("--msg-len", type=_positive_int, default=MESSAGE_SIZE,
                        help="message length in 128-bit blocks")
    parser.add_argument("--base", type=_positive_int, default=Z_BASE,
                        help="branching factor of the base-k DPF")
    return parser


def _run_section(title: str, trials: int, trial: Callable[[], float]) -> float:
    print(_RULE)
    print(title)
    total = 0.0
    for number in range(1, trials + 1):
        total += trial()
        print(f"Done with trial {number} of {trials}")
    print(_RULE)
    return total / trials


def main(argv: Sequence[str] | None = None) -> int:
    """Run every trial and benchmark; return 0 on success and 1 on a failed check."""
    args = _build_parser().parse_args(argv)
    if args.base < 2:
        print("error: base must be at least 2")
        return 2

    try:
        checks = [
            ("DPF.FullEvalZ",
             lambda: run_dpf_z_trial(args.base, args.size, args.msg_len)),
            ("DPF.FullEval", lambda: run_dpf_trial(args.size, args.msg_len)),
            ("HalfDPF.FullEval", lambda: run_half_dpf_trial(args.size, args.msg_len)),
        ]
        for name, trial in checks:
            avg = _run_section(f"Testing {name}", args.trials, trial)
            print("PASS")
            print(f"{name}: (avg time) {avg:0.2f} ms")
            print(_RULE + "\n")
    except CorrectnessError as err:
        print(err)
        return 1

    avg = _run_section("Benchmarking DPF.Gen", args.trials,
                       lambda: benchmark_gen(args.size))
    print(f"Avg time: {avg:0.4f} ms")
    print(_RULE + "\n")

    avg = _run_section("Benchmarking AES", args.trials,
                       lambda: benchmark_aes(args.size, args.msg_len))
    print(f"Avg time: {avg:0.2f} ms")
    print(_RULE + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())