import pytest

from ternarydpf.extensions import extend_output
from ternarydpf.prf import PRF, PRFKeys, PRFKeysZ
from ternarydpf.utils import block_from_bytes


@pytest.fixture
def zero_ext_keys():
    zero = PRF(b"\x00" * 16)
    return PRFKeys(PRF.random(), PRF.random(), PRF.random(), zero)


def test_identity_extension_with_known_key(zero_ext_keys):
    expected = block_from_bytes(bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e"))
    assert extend_output(zero_ext_keys, [0], 1) == [expected]


def test_length_of_extension():
    keys = PRFKeys.generate()
    assert len(extend_output(keys, [5, 6, 7], 12)) == 12


def test_extension_blocks_follow_prf_of_xored_seed():
    keys = PRFKeys.generate()
    seed = 0xABCDEF
    result = extend_output(keys, [seed], 2)
    assert result[0] == keys.prf_key_ext.eval(seed)
    assert result[1] == keys.prf_key_ext.eval(seed ^ 1)


def test_each_block_extended_independently():
    keys = PRFKeys.generate()
    a, b = 11, 1 << 100
    combined = extend_output(keys, [a, b], 6)
    assert combined[:3] == extend_output(keys, [a], 3)
    assert combined[3:] == extend_output(keys, [b], 3)


def test_first_block_of_each_group_is_prf_of_input():
    keys = PRFKeys.generate()
    blocks = [1, 2, 3, 4]
    result = extend_output(keys, blocks, 8)
    assert result[::2] == keys.prf_key_ext.batch_eval(blocks)


def test_works_with_base_keys():
    keys = PRFKeysZ.generate(7)
    assert extend_output(keys, [9], 3) == extend_output(keys, [9], 3)
    assert len(extend_output(keys, [9], 3)) == 3


def test_uses_only_extension_key():
    ext = PRF.random()
    keys_a = PRFKeys(PRF.random(), PRF.random(), PRF.random(), ext)
    keys_b = PRFKeys(PRF.random(), PRF.random(), PRF.random(), ext)
    assert extend_output(keys_a, [42, 43], 4) == extend_output(keys_b, [42, 43], 4)


@pytest.mark.parametrize(
    "output, new_size",
    [([1, 2], 3), ([1, 2], 1), ([1, 2], 0), ([1, 2, 3], 4)],
)
def test_bad_sizes(output, new_size):
    with pytest.raises(ValueError):
        extend_output(PRFKeys.generate(), output, new_size)


def test_empty_output_rejected():
    with pytest.raises(ValueError):
        extend_output(PRFKeys.generate(), [], 4)