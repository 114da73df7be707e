import errno

import pytest

from wgtools.ipcerror import IPCError, IpcErrorCode


@pytest.mark.parametrize(
    "code, number",
    [
        (IpcErrorCode.IO, errno.EIO),
        (IpcErrorCode.PROTOCOL, errno.EPROTO),
        (IpcErrorCode.INVALID, errno.EINVAL),
        (IpcErrorCode.PORT_IN_USE, errno.EADDRINUSE),
    ],
)
def test_codes_are_negative_errno(code, number):
    assert int(code) == -number


def test_unknown_code_matches_enoano():
    err = IPCError(IpcErrorCode.UNKNOWN, "other UAPI error")
    assert err.error_code == -55
    assert str(err) == "IPC error -55: other UAPI error"


def test_str_format():
    err = IPCError(IpcErrorCode.INVALID, "invalid UAPI device key: bogus")
    assert str(err) == f"IPC error {-errno.EINVAL}: invalid UAPI device key: bogus"


def test_error_code_and_message():
    err = IPCError(IpcErrorCode.PORT_IN_USE, "failed to set listen_port")
    assert err.error_code == -errno.EADDRINUSE
    assert err.code is IpcErrorCode.PORT_IN_USE
    assert err.message == "failed to set listen_port"


def test_plain_int_code_is_mapped_to_enum():
    err = IPCError(-errno.EIO, "failed to write output")
    assert err.code is IpcErrorCode.IO
    assert err.error_code == -errno.EIO


def test_unrecognised_code_kept_as_int():
    err = IPCError(-1, "odd")
    assert err.code == -1
    assert str(err) == "IPC error -1: odd"


def test_raise_and_wrap_cause():
    cause = ValueError("hex string does not fit the slice")
    err = IPCError(IpcErrorCode.INVALID, f"failed to set private_key: {cause}")
    assert err.error_code == -errno.EINVAL
    assert str(err) == (
        f"IPC error {-errno.EINVAL}: failed to set private_key: "
        "hex string does not fit the slice"
    )
    with pytest.raises(IPCError) as info:
        raise err from cause
    assert info.value is err
    assert info.value.__cause__ is cause