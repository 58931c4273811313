# ternarydpf

Distributed point functions (DPFs) built on ternary trees, with a variant
for trees of any base k ≥ 2. A DPF splits a point function into two keys.
The point function holds a message at one secret index and zero everywhere
else. Neither key alone reveals the index or the message. Evaluate both keys
over the whole domain and XOR the results: you get the message at the secret
index and zero at every other point.

The tree is expanded with AES-128 in ECB mode with a Davies–Meyer
feed-forward (`F(x) = AES_k(x) ^ x`) as the PRF, provided by the
`cryptography` library. Every value is a 128-bit block held as a Python `int`.

## Install

```
pip install .
```

## Usage

```python
from ternarydpf.prf import PRFKeys, PRFKeysZ
from ternarydpf.dpf import dpf_gen, dpf_full_domain_eval, dpf_gen_z, dpf_full_domain_eval_z
from ternarydpf.halfdpf import half_dpf_gen, half_dpf_full_domain_eval

prf_keys = PRFKeys.generate()

# A domain of 3**4 = 81 points, secret index 17, and a message of two blocks.
message = [0x1234, 0xABCD]
key_a, key_b = dpf_gen(prf_keys, 4, 17, message)

shares_a = dpf_full_domain_eval(key_a)   # 81 tuples of 2 blocks each
shares_b = dpf_full_domain_eval(key_b)
combined = [tuple(x ^ y for x, y in zip(a, b)) for a, b in zip(shares_a, shares_b)]
assert combined[17] == (0x1234, 0xABCD)
assert all(leaf == (0, 0) for i, leaf in enumerate(combined) if i != 17)

# The half variant derives the third child of each node from the parent and
# its two siblings, so it needs only two PRF calls per node.
key_a, key_b = half_dpf_gen(prf_keys, 4, 17, message)
shares_a = half_dpf_full_domain_eval(key_a)

# Trees of another base, here base 7 over 7**3 points.
prf_keys_z = PRFKeysZ.generate(7)
key_a, key_b = dpf_gen_z(7, prf_keys_z, 3, 100, message)
shares_a = dpf_full_domain_eval_z(key_a)
```

A full-domain evaluation returns a list with one entry per leaf. Each entry
is a tuple of `msg_len` blocks.

Generation raises `ValueError` if the index is outside the domain, if the
message is empty, if a block is not a 128-bit value, or if the base given to
`dpf_gen_z` does not match the number of branch keys in the `PRFKeysZ`.

### Modules

- `ternarydpf.prf`: `PRF` (one AES key; `eval` and `batch_eval`),
  `PRFKeys` (three branch PRFs and an extension PRF) and `PRFKeysZ`
  (`base` branch PRFs and an extension PRF).
- `ternarydpf.dpf`: `DPFKey`, `DPFKeyZ`, `dpf_gen`, `dpf_full_domain_eval`,
  `dpf_gen_z` and `dpf_full_domain_eval_z`.
- `ternarydpf.halfdpf`: `half_dpf_gen` and `half_dpf_full_domain_eval`.
  Both work with the same `DPFKey` type.
- `ternarydpf.extensions`: `extend_output`, which stretches each block into
  several blocks using the extension PRF.
- `ternarydpf.utils`: block helpers (`block_to_bytes`, `block_from_bytes`,
  `block_hex`, `get_lsb`, `flip_lsb`) and digit extraction (`get_digit`,
  `get_trit`).
- `ternarydpf.cli`: the correctness trials and benchmarks behind the command.

`DPFKey.to_bytes()` and `DPFKeyZ.to_bytes()` write out the key material as
consecutive 16-byte little-endian blocks. The order is the starting seed,
then the correction words for each branch, then the output correction word.

## Command line

```
ternarydpf --size 4 --msg-len 2 --base 3 --trials 3
```

The command runs correctness trials for the base-k DPF, the ternary DPF and
the half DPF, in that order. It then times key generation and the AES work
of a full-domain evaluation, and prints the average time of each section.

Options:

- `--trials`: trials per section. Default 3.
- `--size`: tree depth. Default 8.
- `--msg-len`: message length in blocks. Default 2.
- `--base`: branching factor of the base-k DPF. Default 7.

The defaults evaluate 7**8 leaves. That takes a long time in pure Python,
so smaller values are useful for a quick run.

The exit status is 0 on success, 1 if any reconstruction is wrong, and 2 if
`--base` is below 2.

## What it does not do

- Keys can only be evaluated over the whole domain. There is no evaluation
  at a single point.
- Keys can be serialised with `to_bytes()`, but nothing reads them back.
- The serialised form does not include the PRF keys. Both parties must share
  the same `PRFKeys` or `PRFKeysZ` object within one process.

## Tests

```
pip install .[test]
pytest
```