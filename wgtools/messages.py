"""Wire encoding of the fixed-size handshake messages."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

from wgtools.keys import NOISE_PUBLIC_KEY_SIZE, NoisePublicKey
from wgtools.noise import (
    MAC_SIZE,
    MESSAGE_COOKIE_REPLY_SIZE,
    MESSAGE_INITIATION_SIZE,
    MESSAGE_RESPONSE_SIZE,
    TAG_SIZE,
    XNONCE_SIZE,
    MessageType,
)
from wgtools.tai64n import TIMESTAMP_SIZE

STATIC_SIZE = NOISE_PUBLIC_KEY_SIZE + TAG_SIZE
SEALED_TIMESTAMP_SIZE = TIMESTAMP_SIZE + TAG_SIZE
COOKIE_SIZE = MAC_SIZE + TAG_SIZE

_INITIATION = struct.Struct(
    f"<II{NOISE_PUBLIC_KEY_SIZE}s{STATIC_SIZE}s{SEALED_TIMESTAMP_SIZE}s"
    f"{MAC_SIZE}s{MAC_SIZE}s"
)
_RESPONSE = struct.Struct(
    f"<III{NOISE_PUBLIC_KEY_SIZE}s{TAG_SIZE}s{MAC_SIZE}s{MAC_SIZE}s"
)
_COOKIE_REPLY = struct.Struct(f"<II{XNONCE_SIZE}s{COOKIE_SIZE}s")

_U32_MAX = 0xFFFFFFFF

PublicKeyLike = Union[NoisePublicKey, bytes]


class MessageLengthError(ValueError):
    """Raised when a buffer does not have the exact size of its message."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__("message length mismatch")
        self.expected = expected
        self.actual = actual


def _require_size(data: bytes, size: int) -> None:
    if len(data) != size:
        raise MessageLengthError(size, len(data))


def _fixed(name: str, value: bytes, size: int) -> bytes:
    raw = bytes(value)
    if len(raw) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(raw)}")
    return raw


def _u32(name: str, value: int) -> int:
    value = int(value)
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{name} must fit in 32 bits, got {value}")
    return value


def _public_key(value: PublicKeyLike) -> NoisePublicKey:
    if isinstance(value, NoisePublicKey):
        return value
    return NoisePublicKey(_fixed("ephemeral", value, NOISE_PUBLIC_KEY_SIZE))


@dataclass
class MessageInitiation:
    """First handshake message, sent by the initiator."""

    type: int = MessageType.INITIATION
    sender: int = 0
    ephemeral: NoisePublicKey = field(default_factory=NoisePublicKey)
    static: bytes = bytes(STATIC_SIZE)
    timestamp: bytes = bytes(SEALED_TIMESTAMP_SIZE)
    mac1: bytes = bytes(MAC_SIZE)
    mac2: bytes = bytes(MAC_SIZE)

    def __post_init__(self) -> None:
        self.type = _u32("type", self.type)
        self.sender = _u32("sender", self.sender)
        self.ephemeral = _public_key(self.ephemeral)
        self.static = _fixed("static", self.static, STATIC_SIZE)
        self.timestamp = _fixed("timestamp", self.timestamp, SEALED_TIMESTAMP_SIZE)
        self.mac1 = _fixed("mac1", self.mac1, MAC_SIZE)
        self.mac2 = _fixed("mac2", self.mac2, MAC_SIZE)

    @classmethod
    def unpack(cls, data: bytes) -> MessageInitiation:
        """Decode exactly MESSAGE_INITIATION_SIZE bytes."""
        _require_size(data, MESSAGE_INITIATION_SIZE)
        type_, sender, ephemeral, static, timestamp, mac1, mac2 = _INITIATION.unpack(
            bytes(data)
        )
        return cls(type_, sender, NoisePublicKey(ephemeral), static, timestamp, mac1, mac2)

    def pack(self) -> bytes:
        """Encode the message in little-endian wire order."""
        return _INITIATION.pack(
            self.type,
            self.sender,
            bytes(self.ephemeral),
            self.static,
            self.timestamp,
            self.mac1,
            self.mac2,
        )


@dataclass
class MessageResponse:
    """Second handshake message, sent by the responder."""

    type: int = MessageType.RESPONSE
    sender: int = 0
    receiver: int = 0
    ephemeral: NoisePublicKey = field(default_factory=NoisePublicKey)
    empty: bytes = bytes(TAG_SIZE)
    mac1: bytes = bytes(MAC_SIZE)
    mac2: bytes = bytes(MAC_SIZE)

    def __post_init__(self) -> None:
        self.type = _u32("type", self.type)
        self.sender = _u32("sender", self.sender)
        self.receiver = _u32("receiver", self.receiver)
        self.ephemeral = _public_key(self.ephemeral)
        self.empty = _fixed("empty", self.empty, TAG_SIZE)
        self.mac1 = _fixed("mac1", self.mac1, MAC_SIZE)
        self.mac2 = _fixed("mac2", self.mac2, MAC_SIZE)

    @classmethod
    def unpack(cls, data: bytes) -> MessageResponse:
        """Decode exactly MESSAGE_RESPONSE_SIZE bytes."""
        _require_size(data, MESSAGE_RESPONSE_SIZE)
        type_, sender, receiver, ephemeral, empty, mac1, mac2 = _RESPONSE.unpack(
            bytes(data)
        )
        return cls(type_, sender, receiver, NoisePublicKey(ephemeral), empty, mac1, mac2)

    def pack(self) -> bytes:
        """Encode the message in little-endian wire order."""
        return _RESPONSE.pack(
            self.type,
            self.sender,
            self.receiver,
            bytes(self.ephemeral),
            self.empty,
            self.mac1,
            self.mac2,
        )


@dataclass
class MessageCookieReply:
    """Cookie sent back to a peer when the receiver is under load."""

    type: int = MessageType.COOKIE_REPLY
    receiver: int = 0
    nonce: bytes = bytes(XNONCE_SIZE)
    cookie: bytes = bytes(COOKIE_SIZE)

    def __post_init__(self) -> None:
        self.type = _u32("type", self.type)
        self.receiver = _u32("receiver", self.receiver)
        self.nonce = _fixed("nonce", self.nonce, XNONCE_SIZE)
        self.cookie = _fixed("cookie", self.cookie, COOKIE_SIZE)

    @classmethod
    def unpack(cls, data: bytes) -> MessageCookieReply:
        """Decode exactly MESSAGE_COOKIE_REPLY_SIZE bytes."""
        _require_size(data, MESSAGE_COOKIE_REPLY_SIZE)
        type_, receiver, nonce, cookie = _COOKIE_REPLY.unpack(bytes(data))
        return cls(type_, receiver, nonce, cookie)

    def pack(self) -> bytes:
        """Encode the message in little-endian wire order."""
        return _COOKIE_REPLY.pack(self.type, self.receiver, self.nonce, self.cookie)