import pytest

from wgtools import noise
from wgtools.noise import HandshakeState, MessageType, mix_hash


@pytest.mark.parametrize(
    "state, name",
    [
        (HandshakeState.ZEROED, "handshakeZeroed"),
        (HandshakeState.INITIATION_CREATED, "handshakeInitiationCreated"),
        (HandshakeState.INITIATION_CONSUMED, "handshakeInitiationConsumed"),
        (HandshakeState.RESPONSE_CREATED, "handshakeResponseCreated"),
        (HandshakeState.RESPONSE_CONSUMED, "handshakeResponseConsumed"),
    ],
)
def test_handshake_state_names(state, name):
    assert str(state) == name


def test_message_types_match_wire_values():
    assert [int(t) for t in MessageType] == [1, 2, 3, 4]
    assert MessageType(4) is MessageType.TRANSPORT


def test_mix_hash_length_and_determinism():
    h = bytes(32)
    first = mix_hash(h, b"data")
    assert len(first) == noise.HASH_SIZE
    assert mix_hash(h, b"data") == first


def test_mix_hash_depends_on_both_inputs():
    h = bytes(32)
    assert mix_hash(h, b"a") != mix_hash(h, b"b")
    assert mix_hash(h, b"a") != mix_hash(b"\x01" * 32, b"a")


def test_mix_hash_is_not_associative_over_chaining():
    h = bytes(32)
    assert mix_hash(mix_hash(h, b"a"), b"b") != mix_hash(h, b"ab")


def test_initial_hash_derived_from_chain_key():
    assert len(noise.INITIAL_CHAIN_KEY) == 32
    assert noise.INITIAL_HASH == mix_hash(
        noise.INITIAL_CHAIN_KEY, noise.WG_IDENTIFIER.encode("ascii")
    )
    assert noise.INITIAL_HASH != noise.INITIAL_CHAIN_KEY