"""Address spaces of user programs loaded from NOFF files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Dict, List, Optional, Union

from .noff import NOFFMAGIC, NoffHeader

__all__ = [
    "USER_STACK_SIZE",
    "ExceptionType",
    "TranslationEntry",
    "AddressSpaceError",
    "AddressSpace",
]

USER_STACK_SIZE = 1024
"""Bytes reserved at the top of each address space for the user stack."""

_STACK_MARGIN = 16


class ExceptionType(Enum):
    """Outcomes of an address translation or a trap into the kernel."""

    NO_EXCEPTION = auto()
    SYSCALL = auto()
    READ_ONLY = auto()
    BUS_ERROR = auto()
    ADDRESS_ERROR = auto()


@dataclass
class TranslationEntry:
    """One page-table entry mapping a virtual page to a physical frame."""

    virtual_page: int
    physical_page: int
    valid: bool = True
    read_only: bool = False
    use: bool = False
    dirty: bool = False


class AddressSpaceError(Exception):
    """Raised when a program cannot be loaded or an address cannot be used.

    ``exception`` holds the machine exception a failed translation causes.
    """

    def __init__(self, message: str, exception: Optional[ExceptionType] = None):
        super().__init__(message)
        self.exception = exception


Executable = Union[bytes, bytearray, memoryview, str, "os.PathLike[str]"]


class AddressSpace:
    """A linear, one-to-one page table over physical memory."""

    def __init__(
        self,
        num_phys_pages: int = 128,
        page_size: int = 128,
        readonly_data: bool = False,
    ) -> None:
        if num_phys_pages <= 0 or page_size <= 0:
            raise ValueError("page count and page size must be positive")
        self.num_phys_pages = num_phys_pages
        self.page_size = page_size
        self.readonly_data = readonly_data
        self.num_pages = 0
        self.page_table: List[TranslationEntry] = [
            TranslationEntry(virtual_page=page, physical_page=page)
            for page in range(num_phys_pages)
        ]

    @property
    def memory_size(self) -> int:
        """Bytes of physical memory the page table covers."""
        return self.num_phys_pages * self.page_size

    @staticmethod
    def _read_executable(executable: Executable) -> bytes:
        if isinstance(executable, (bytes, bytearray, memoryview)):
            return bytes(executable)
        path = Path(executable)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise AddressSpaceError(f"Unable to open file {path}") from exc

    def load(self, executable: Executable, memory: bytearray) -> NoffHeader:
        """Load a NOFF program into ``memory`` and size the address space.

        ``executable`` is the program's bytes or the path of its file.
        Memory is cleared first; code, initialised data and (when enabled)
        read-only data are copied to their virtual addresses.
        """
        data = self._read_executable(executable)
        if len(memory) < self.memory_size:
            raise AddressSpaceError(
                f"memory holds {len(memory)} bytes, need {self.memory_size}"
            )
        try:
            header = NoffHeader.unpack(data, self.readonly_data)
        except ValueError as exc:
            raise AddressSpaceError(str(exc)) from exc
        if header.magic != NOFFMAGIC:
            raise AddressSpaceError(f"bad NOFF magic number {header.magic:#x}")

        copied = [header.code, header.init_data]
        if header.readonly_data is not None:
            copied.append(header.readonly_data)
        size = sum(segment.size for segment in copied)
        size += header.uninit_data.size + USER_STACK_SIZE
        num_pages = -(-size // self.page_size)
        if num_pages > self.num_phys_pages:
            raise AddressSpaceError(
                f"program needs {num_pages} pages, only {self.num_phys_pages} exist"
            )

        memory[: self.memory_size] = bytes(self.memory_size)
        for segment in copied:
            if segment.size <= 0:
                continue
            chunk = data[segment.file_offset : segment.file_offset + segment.size]
            start = segment.virtual_address
            end = start + len(chunk)
            if start < 0 or end > self.memory_size:
                raise AddressSpaceError(
                    f"segment at {start:#x} of {segment.size} bytes lies outside memory"
                )
            memory[start:end] = chunk
        self.num_pages = num_pages
        return header

    def translate(self, vaddr: int, writing: bool = False) -> int:
        """Return the physical address of ``vaddr``, marking the page used.

        Raises AddressSpaceError whose ``exception`` names the fault.
        """
        vpn, offset = divmod(vaddr, self.page_size)
        if vaddr < 0 or vpn >= self.num_pages:
            raise AddressSpaceError(
                f"virtual address {vaddr:#x} is outside the address space",
                ExceptionType.ADDRESS_ERROR,
            )
        entry = self.page_table[vpn]
        if writing and entry.read_only:
            raise AddressSpaceError(
                f"write to read-only page {vpn}", ExceptionType.READ_ONLY
            )
        frame = entry.physical_page
        if frame >= self.num_phys_pages:
            raise AddressSpaceError(
                f"illegal physical page {frame}", ExceptionType.BUS_ERROR
            )
        entry.use = True
        if writing:
            entry.dirty = True
        paddr = frame * self.page_size + offset
        if paddr >= self.memory_size:
            raise AddressSpaceError(
                f"physical address {paddr:#x} is outside memory",
                ExceptionType.BUS_ERROR,
            )
        return paddr

    def initial_registers(self) -> Dict[str, int]:
        """Register values a program starts with: pc, next_pc and sp."""
        return {
            "pc": 0,
            "next_pc": 4,
            "sp": self.num_pages * self.page_size - _STACK_MARGIN,
        }