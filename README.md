# wgtools

Pure-Python building blocks for a userspace WireGuard daemon. The package has
no dependencies outside the standard library.

## Modules

- `wgtools.replay`: `Filter`, a sliding-window anti-replay filter (RFC 6479).
  `validate_counter(counter, limit)` returns `True` for a counter that is below
  `limit`, has not been seen before and is not too far behind the newest one;
  `reset()` empties the window.
- `wgtools.tai64n`: `Timestamp`, a 12-byte TAI64N label whose byte order is its
  time order, with `after()`, `seconds`, `nanoseconds` and a readable `str()`.
  `stamp(unix_nanos)` builds one from nanoseconds since the Unix epoch, with the
  low bits of the nanosecond part cleared; `now()` stamps the current time.
- `wgtools.ratelimiter`: `Ratelimiter`, a per-address token bucket (a burst of
  5, then 20 packets per second). Call `init()` (or use it as a context
  manager) before `allow(ip)`; a background thread drops idle entries, and
  `cleanup()` can be called directly. The clock can be supplied as a function
  returning nanoseconds.
- `wgtools.pools`: `WaitPool(max_count, factory)`, an object pool whose `get()`
  blocks while `max_count` items are out (0 means no limit); `put()` returns an
  item and `in_use` reports how many are out.
- `wgtools.rwcancel`: `RWCancel(fd)` makes a descriptor non-blocking and offers
  `read()`, `write()`, `ready_read()` and `ready_write()` that wait with
  `poll`; `cancel()` wakes any waiter, after which `read`/`write` raise
  `OSError(EBADF)`. `retry_after_error(err)` tells whether an error is EAGAIN or
  EINTR.
- `wgtools.keys`: `NoisePublicKey` and `NoisePresharedKey`, immutable 32-byte
  keys with `from_hex()`, `hex()`, `is_zero()` and constant-time equality;
  `NoisePublicKey.peer_label()` gives the short `peer(XXXX…YYYY)` form.
  `load_exact_hex(src, size)` raises `ValueError` on bad hex or a wrong length.
- `wgtools.noise`: protocol constants and sizes, `MessageType`,
  `HandshakeState`, `mix_hash(h, data)` (BLAKE2s-256), `INITIAL_CHAIN_KEY` and
  `INITIAL_HASH`.
- `wgtools.messages`: `MessageInitiation`, `MessageResponse` and
  `MessageCookieReply` dataclasses with `pack()` and `unpack()` in little-endian
  wire order; a buffer of the wrong size raises `MessageLengthError`.
- `wgtools.timer`: `Timer(callback)`, a one-shot timer with `mod(delay)` (in
  seconds), `delete()`, `delete_sync()` and `is_pending()`.
- `wgtools.uapi`: `sock_path()`, `uapi_open(name, directory)` which creates the
  listening Unix socket (replacing a stale socket file, raising
  `OSError(EADDRINUSE)` if it is still served), and `UAPIListener`, which hands
  out connections from `accept()` and fails once the socket file is removed.
- `wgtools.ipcerror`: `IpcErrorCode` (negative errno values) and `IPCError`,
  whose `str()` reads `IPC error <code>: <message>`.

## Installation

```
pip install .
```

## Examples

```python
from wgtools.replay import Filter

window = Filter()
assert window.validate_counter(0, 2**64 - 2**13 - 1)
assert not window.validate_counter(0, 2**64 - 2**13 - 1)  # replayed
```

```python
from wgtools.tai64n import stamp

earlier = stamp(123_456_789)
later = stamp(123_456_789 + 20_000_000)
assert later.after(earlier)
```

```python
from wgtools.keys import NoisePublicKey

key = NoisePublicKey.from_hex("00" * 32)
assert key.is_zero()
```

```python
from wgtools.messages import MessageCookieReply

reply = MessageCookieReply(receiver=7)
assert MessageCookieReply.unpack(reply.pack()) == reply
```

```python
from wgtools.ratelimiter import Ratelimiter

with Ratelimiter() as limiter:
    if limiter.allow("192.0.2.1"):
        ...  # handle the handshake packet
```

## What this package does not do

There is no daemon and no command to run. The package does not create or read
a TUN device, send or receive UDP traffic, or perform the handshake
cryptography (key agreement, AEAD sealing, key derivation); `wgtools.noise`
provides only the constants, states and hash mixing. `wgtools.uapi` opens and
listens on the control socket, but nothing here parses or answers the `get`
and `set` configuration requests; `IPCError` is only the error type for them.

## Running the tests

```
pip install .[test]
pytest
```