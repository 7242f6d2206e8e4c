# tests/test_core.py
import pytest

from starledger.core.types import Block, GENESIS_DATA
from starledger.core.errors import GenesisHasNoData, MalformedPayload
from starledger.core.encoding import hex2utf8, b64url_encode, b64url_decode
from starledger.core.canon import canonical_body, canonical_json_str


@pytest.fixture
def sealed_block():
    block = Block({"identity": "alice", "payload": {"star": "Vega"}})
    block.height = 3
    block.time = 1700000000
    block.previous_hash = "ab" * 32
    block.hash = block.compute_hash()
    return block


def test_initialize_sets_hex_body_and_defaults():
    data = "some data"
    block = Block(data)

    assert block.hash is None
    assert block.height == 0
    assert block.body == canonical_body(data).hex()
    assert block.time == 0
    assert block.previous_hash is None


def test_hex2utf8_decodes_non_ascii():
    text = "§1234567890-=qwertyuiop[]asdfghjk;'zxcvbnm,./!@#$%ˆ&*()_+{}:|˜<>?*⁄€‹›ﬁﬂ‡°·‚—±QWERTY"
    assert hex2utf8(text.encode("utf-8").hex()) == text


def test_compute_hash_is_pure(sealed_block):
    stored = sealed_block.hash
    assert sealed_block.compute_hash() == stored
    assert sealed_block.compute_hash() == stored
    assert sealed_block.hash == stored
    assert len(stored) == 64


def test_compute_hash_ignores_stored_hash(sealed_block):
    expected = sealed_block.compute_hash()
    sealed_block.hash = "deadbeef"
    assert sealed_block.compute_hash() == expected


def test_validate_sealed_block(sealed_block):
    assert sealed_block.validate() is True
    assert sealed_block.validate() is True


def test_validate_unsealed_block():
    assert Block({"a": 1}).validate() is False


@pytest.mark.parametrize("field,value", [
    ("body", Block({"identity": "mallory"}).body),
    ("height", 4),
    ("time", 1),
    ("previous_hash", "cd" * 32),
])
def test_validate_detects_tampering(sealed_block, field, value):
    setattr(sealed_block, field, value)
    assert sealed_block.validate() is False
    # validating doesn't "repair" the stored hash
    assert sealed_block.validate() is False


def test_get_data(sealed_block):
    assert sealed_block.get_data() == {"identity": "alice", "payload": {"star": "Vega"}}


def test_get_data_genesis_has_no_data():
    genesis = Block(GENESIS_DATA)
    with pytest.raises(GenesisHasNoData):
        genesis.get_data()


@pytest.mark.parametrize("body", ["zz", "ff", "7b226122"])  # not hex, not utf-8, truncated JSON
def test_get_data_malformed(sealed_block, body):
    sealed_block.body = body
    with pytest.raises(MalformedPayload) as exc:
        sealed_block.get_data()
    assert exc.value.height == 3


def test_block_dict_roundtrip_keeps_validity(sealed_block):
    restored = Block.from_dict(sealed_block.to_dict())
    assert restored == sealed_block
    assert restored.validate() is True


def test_block_from_dict_rejects_unknown_fields(sealed_block):
    d = sealed_block.to_dict()
    d["nonce"] = 7
    with pytest.raises(ValueError):
        Block.from_dict(d)


def test_base64url_no_padding():
    encoded = b64url_encode(b'{"hello":"world"}')
    assert "=" not in encoded
    assert b64url_decode(encoded) == b'{"hello":"world"}'


def test_canonical_json_sorting():
    messy = {
        "z": 1,
        "a": "hello",
        "nested": {"b": 2, "a": 1},
    }
    assert canonical_json_str(messy) == '{"a":"hello","nested":{"a":1,"b":2},"z":1}'


def _seal(data):
    block = Block(data)
    block.height = 1
    block.time = 1700000000
    block.previous_hash = "ab" * 32
    block.hash = block.compute_hash()
    return block


@pytest.mark.parametrize("data", [
    {"star": {"ra": "18h 36m 56s", "dec": "+38° 47′ 01″", "tags": ["blue", "bright"]}},
    {"story": "天琴座のベガ ✨", "emoji": "🌟"},
    {"magnitude": 0.03, "distance_ly": 25.04, "neg": -1.5e-10},
    {"n": 2**53 + 1},
    {"id": 12345678901234567890, "neg": -(2**70)},
    [1, "two", None, True, {"nested": [[], {}]}],
    "plain string",
])
def test_get_data_returns_exactly_what_was_stored(data):
    block = _seal(data)
    assert block.validate() is True
    assert block.get_data() == data


def test_body_is_canonical():
    assert Block({"b": 1, "a": [2, 3]}).body == Block({"a": [2, 3], "b": 1}).body
    assert hex2utf8(Block({"b": 1, "a": "é"}).body) == '{"a":"é","b":1}'


@pytest.mark.parametrize("data", [
    {1: "a"},
    {"outer": {2: "b"}},
    [{None: "c"}],
    {"when": object()},
    {"bad": float("nan")},
    {"bad": float("inf")},
])
def test_unserializable_data_raises_type_error(data):
    with pytest.raises(TypeError):
        Block(data)
