"""Fixed-size Noise keys: hex parsing, constant-time comparison and labels."""

from __future__ import annotations

import base64
import binascii
import hmac
from dataclasses import dataclass
from typing import ClassVar

NOISE_PUBLIC_KEY_SIZE = 32
NOISE_PRIVATE_KEY_SIZE = 32
NOISE_PRESHARED_KEY_SIZE = 32


def load_exact_hex(src: str, size: int) -> bytes:
    """Decode ``src`` as hex and require exactly ``size`` bytes.

    Raises ValueError on malformed hex or on a length mismatch.
    """
    try:
        decoded = binascii.unhexlify(src)
    except (binascii.Error, ValueError) as err:
        raise ValueError(f"invalid hex string: {err}") from err
    if len(decoded) != size:
        raise ValueError("hex string does not fit the slice")
    return decoded


def _all_zero(raw: bytes) -> bool:
    return hmac.compare_digest(raw, bytes(len(raw)))


@dataclass(frozen=True, eq=False)
class _Key:
    """Immutable key of a fixed size; compared in constant time."""

    SIZE: ClassVar[int] = 32

    raw: bytes = b""

    def __post_init__(self) -> None:
        raw = bytes(self.raw) if self.raw else bytes(self.SIZE)
        if len(raw) != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} must be {self.SIZE} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "raw", raw)

    def hex(self) -> str:
        """Lowercase hex encoding of the key."""
        return self.raw.hex()

    def __bytes__(self) -> bytes:
        return self.raw

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return hmac.compare_digest(self.raw, other.raw)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.raw))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{self.SIZE} bytes>)"


@dataclass(frozen=True, eq=False, repr=False)
class NoisePublicKey(_Key):
    """A Curve25519 public key identifying a peer."""

    SIZE: ClassVar[int] = NOISE_PUBLIC_KEY_SIZE

    @classmethod
    def from_hex(cls, src: str) -> "NoisePublicKey":
        """Parse a public key from exactly 32 bytes of hex."""
        return cls(load_exact_hex(src, cls.SIZE))

    def is_zero(self) -> bool:
        """Return True if every byte of the key is zero."""
        return _all_zero(self.raw)

    def peer_label(self) -> str:
        """Short form ``peer(XXXX…YYYY)`` built from the base64 encoding."""
        encoded = base64.b64encode(self.raw).decode("ascii")
        return f"peer({encoded[0:4]}…{encoded[39:43]})"


@dataclass(frozen=True, eq=False, repr=False)
class NoisePresharedKey(_Key):
    """A symmetric pre-shared key mixed into the handshake."""

    SIZE: ClassVar[int] = NOISE_PRESHARED_KEY_SIZE

    @classmethod
    def from_hex(cls, src: str) -> "NoisePresharedKey":
        """Parse a pre-shared key from exactly 32 bytes of hex."""
        return cls(load_exact_hex(src, cls.SIZE))

    def is_zero(self) -> bool:
        """Return True if every byte of the key is zero."""
        return _all_zero(self.raw)