import pytest

from noffkit.syscalls import Errno, SyscallCode, sys_add


def test_add_program_result():
    assert sys_add(42, 23) == 65


def test_lot_of_add_is_stable():
    results = [sys_add(42, 23) for _ in range(11)]
    assert results == [65] * 11


@pytest.mark.parametrize("op1, op2", [(0, 0), (1, -1), (-5, 3), (100, 200)])
def test_add_is_commutative(op1, op2):
    assert sys_add(op1, op2) == sys_add(op2, op1)


def test_add_wraps_on_overflow():
    assert sys_add(2**31 - 1, 1) == -(2**31)


def test_add_wraps_on_underflow():
    assert sys_add(-(2**31), -1) == 2**31 - 1


def test_add_code_is_looked_up_from_register_value():
    assert SyscallCode(42) is SyscallCode.ADD
    assert SyscallCode(100) is SyscallCode.MSG


def test_unknown_syscall_code_raises():
    with pytest.raises(ValueError):
        SyscallCode(6)


def test_ewouldblock_is_eagain():
    assert Errno(-11) is Errno.EWOULDBLOCK
    assert Errno["EWOULDBLOCK"] is Errno.EAGAIN


def test_errno_lookup_by_value():
    assert Errno(-2) is Errno.ENOENT
    assert Errno(-57) is Errno.EBADSLT


@pytest.mark.parametrize("value", [-41, 1, 0])
def test_errno_unknown_value_raises(value):
    with pytest.raises(ValueError):
        Errno(value)