import pytest

from ternarydpf.prf import PRF, PRFKeys, PRFKeysZ
from ternarydpf.utils import block_from_bytes, block_to_bytes


def test_zero_key_zero_block_matches_aes_vector():
    prf = PRF(b"\x00" * 16)
    expected = block_from_bytes(bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e"))
    assert prf.eval(0) == expected


def test_fips197_vector_with_feed_forward():
    prf = PRF(bytes(range(16)))
    plain = block_from_bytes(bytes.fromhex("00112233445566778899aabbccddeeff"))
    cipher = block_from_bytes(bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a"))
    assert prf.eval(plain) ^ plain == cipher


def test_batch_eval_matches_single_evals():
    prf = PRF.random()
    blocks = [0, 1, 2, 0xFFFF, (1 << 128) - 1, 123456789]
    assert prf.batch_eval(blocks) == [prf.eval(b) for b in blocks]


def test_batch_eval_empty():
    assert PRF.random().batch_eval([]) == []


def test_batch_eval_accepts_generator():
    prf = PRF.random()
    assert prf.batch_eval(i for i in range(5)) == [prf.eval(i) for i in range(5)]


def test_eval_is_deterministic():
    expected = block_from_bytes(bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e"))
    first = PRF(b"\x00" * 16)
    second = PRF(bytes(16))
    assert first.eval(0) == expected
    assert second.batch_eval([0, 0]) == [expected, expected]


def test_output_fits_in_block():
    prf = PRF.random()
    for value in prf.batch_eval(range(50)):
        assert len(block_to_bytes(value)) == 16


@pytest.mark.parametrize("key", [b"", b"\x00" * 15, b"\x00" * 32])
def test_bad_key_length(key):
    with pytest.raises(ValueError):
        PRF(key)


@pytest.mark.parametrize("block", [-1, 1 << 128])
def test_eval_rejects_out_of_range_block(block):
    with pytest.raises(ValueError):
        PRF.random().eval(block)


def test_random_keys_differ():
    outputs = {PRF.random().eval(0) for _ in range(5)}
    assert len(outputs) == 5


def test_repr_hides_key():
    key = bytes(range(16))
    assert key.hex() not in repr(PRF(key))


def test_prf_keys_generate_independent():
    keys = PRFKeys.generate()
    outputs = {
        keys.prf_key0.eval(7),
        keys.prf_key1.eval(7),
        keys.prf_key2.eval(7),
        keys.prf_key_ext.eval(7),
    }
    assert len(outputs) == 4


@pytest.mark.parametrize("base", [2, 3, 7])
def test_prf_keys_z_generate(base):
    keys = PRFKeysZ.generate(base)
    assert keys.base == base
    assert len(keys.prf_key) == base
    outputs = {k.eval(3) for k in keys.prf_key} | {keys.prf_key_ext.eval(3)}
    assert len(outputs) == base + 1


@pytest.mark.parametrize("base", [0, -2])
def test_prf_keys_z_rejects_bad_base(base):
    with pytest.raises(ValueError):
        PRFKeysZ.generate(base)