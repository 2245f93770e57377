"""System call codes, error numbers and the kernel side of simple calls."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "SYS_CONSOLE_INPUT",
    "SYS_CONSOLE_OUTPUT",
    "SyscallCode",
    "Errno",
    "sys_add",
]

SYS_CONSOLE_INPUT = 0
"""Open-file id of the console keyboard in every address space."""

SYS_CONSOLE_OUTPUT = 1
"""Open-file id of the console display in every address space."""

_INT_BITS = 32


class SyscallCode(IntEnum):
    """Codes placed in r2 by user programs to select a system call."""

    HALT = 0
    EXIT = 1
    EXEC = 2
    JOIN = 3
    CREATE = 4
    REMOVE = 5
    SEEK = 9
    THREAD_FORK = 11
    THREAD_YIELD = 12
    EXEC_V = 13
    THREAD_EXIT = 14
    THREAD_JOIN = 15
    PRINT_INT = 16
    ADD = 42
    MSG = 100


class Errno(IntEnum):
    """Negative error codes returned by system calls."""

    EPERM = -1
    ENOENT = -2
    ESRCH = -3
    EINTR = -4
    EIO = -5
    ENXIO = -6
    E2BIG = -7
    ENOEXEC = -8
    EBADF = -9
    ECHILD = -10
    EAGAIN = -11
    ENOMEM = -12
    EACCES = -13
    EFAULT = -14
    ENOTBLK = -15
    EBUSY = -16
    EEXIST = -17
    EXDEV = -18
    ENODEV = -19
    ENOTDIR = -20
    EISDIR = -21
    EINVAL = -22
    ENFILE = -23
    EMFILE = -24
    ENOTTY = -25
    ETXTBSY = -26
    EFBIG = -27
    ENOSPC = -28
    ESPIPE = -29
    EROFS = -30
    EMLINK = -31
    EPIPE = -32
    EDOM = -33
    ERANGE = -34
    EDEADLK = -35
    ENAMETOOLONG = -36
    ENOLCK = -37
    ENOSYS = -38
    ENOTEMPTY = -39
    ELOOP = -40
    EWOULDBLOCK = -11
    ENOMSG = -42
    EIDRM = -43
    ECHRNG = -44
    EL2NSYNC = -45
    EL3HLT = -46
    EL3RST = -47
    ELNRNG = -48
    EUNATCH = -49
    ENOCSI = -50
    EL2HLT = -51
    EBADE = -52
    EBADR = -53
    EXFULL = -54
    ENOANO = -55
    EBADRQC = -56
    EBADSLT = -57


def sys_add(op1: int, op2: int) -> int:
    """Add two machine integers, wrapping like a 32-bit signed register."""
    total = (op1 + op2) & ((1 << _INT_BITS) - 1)
    if total >= 1 << (_INT_BITS - 1):
        total -= 1 << _INT_BITS
    return total