"""Noise_IKpsk2 protocol constants, handshake states and hash mixing."""

from __future__ import annotations

import enum
import hashlib

NOISE_CONSTRUCTION = "Noise_IKpsk2_25519_ChaChaPoly_BLAKE2s"
WG_IDENTIFIER = "WireGuard v1 zx2c4 [email]"
WG_LABEL_MAC1 = "mac1----"
WG_LABEL_COOKIE = "cookie--"

HASH_SIZE = 32
TAG_SIZE = 16
MAC_SIZE = 16
NONCE_SIZE = 12
XNONCE_SIZE = 24

MESSAGE_INITIATION_SIZE = 148
MESSAGE_RESPONSE_SIZE = 92
MESSAGE_COOKIE_REPLY_SIZE = 64
MESSAGE_TRANSPORT_HEADER_SIZE = 16
MESSAGE_TRANSPORT_SIZE = MESSAGE_TRANSPORT_HEADER_SIZE + TAG_SIZE
MESSAGE_KEEPALIVE_SIZE = MESSAGE_TRANSPORT_SIZE
MESSAGE_HANDSHAKE_SIZE = MESSAGE_INITIATION_SIZE

MESSAGE_TRANSPORT_OFFSET_RECEIVER = 4
MESSAGE_TRANSPORT_OFFSET_COUNTER = 8
MESSAGE_TRANSPORT_OFFSET_CONTENT = 16

ZERO_NONCE = bytes(NONCE_SIZE)


class MessageType(enum.IntEnum):
    """Type field of a message; a little-endian 32-bit integer on the wire."""

    INITIATION = 1
    RESPONSE = 2
    COOKIE_REPLY = 3
    TRANSPORT = 4


class HandshakeState(enum.IntEnum):
    """Progress of a peer's handshake."""

    ZEROED = 0
    INITIATION_CREATED = 1
    INITIATION_CONSUMED = 2
    RESPONSE_CREATED = 3
    RESPONSE_CONSUMED = 4

    def __str__(self) -> str:
        return _STATE_NAMES[self]


_STATE_NAMES = {
    HandshakeState.ZEROED: "handshakeZeroed",
    HandshakeState.INITIATION_CREATED: "handshakeInitiationCreated",
    HandshakeState.INITIATION_CONSUMED: "handshakeInitiationConsumed",
    HandshakeState.RESPONSE_CREATED: "handshakeResponseCreated",
    HandshakeState.RESPONSE_CONSUMED: "handshakeResponseConsumed",
}


def mix_hash(h: bytes, data: bytes) -> bytes:
    """Return BLAKE2s-256 of the running hash ``h`` followed by ``data``."""
    digest = hashlib.blake2s(digest_size=HASH_SIZE)
    digest.update(h)
    digest.update(data)
    return digest.digest()


INITIAL_CHAIN_KEY = hashlib.blake2s(
    NOISE_CONSTRUCTION.encode("ascii"), digest_size=HASH_SIZE
).digest()
INITIAL_HASH = mix_hash(INITIAL_CHAIN_KEY, WG_IDENTIFIER.encode("ascii"))