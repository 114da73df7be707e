"""Building blocks for a userspace WireGuard daemon: replay filter, TAI64N
timestamps, rate limiting, pools, timers, keys, handshake messages and the
UAPI control socket."""

__version__ = "0.1.0"