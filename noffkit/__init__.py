"""COFF to NOFF conversion, NOFF and COFF headers, address-space loading, system call codes, synchronisation primitives and a FIFO scheduler."""

__version__ = "0.1.0"

__all__ = ["addrspace", "coff", "convert", "noff", "scheduler", "synch", "synchlist", "syscalls"]