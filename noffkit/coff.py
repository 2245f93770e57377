"""Headers of MIPS little-endian COFF object files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar, Tuple

MIPSELMAGIC = 0x0162
"""File-header magic number of a little-endian MIPS object file."""

OMAGIC = 0o407
"""System-header magic number of an impure (non-shared text) executable."""

SOMAGIC = 0x0701

__all__ = [
    "MIPSELMAGIC",
    "OMAGIC",
    "SOMAGIC",
    "CoffError",
    "FileHeader",
    "AoutHeader",
    "SectionHeader",
]


class CoffError(ValueError):
    """Raised when COFF data is too short or a header cannot be encoded."""


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise CoffError(
            f"{what} is too short: need {layout.size} bytes, got {len(data)}"
        )
    return layout.unpack_from(data)


def _pack(layout: struct.Struct, values: tuple, what: str) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise CoffError(f"cannot encode {what}: {exc}") from exc


@dataclass
class FileHeader:
    """The COFF file header that opens every object file."""

    magic: int = MIPSELMAGIC
    section_count: int = 0
    timestamp: int = 0
    symbol_pointer: int = 0
    symbol_count: int = 0
    optional_header_size: int = 0
    flags: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<HHiiiHH")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def unpack(cls, data: bytes) -> "FileHeader":
        """Decode a file header from the start of ``data``."""
        return cls(*_unpack(cls._LAYOUT, data, "file header"))

    def pack(self) -> bytes:
        """Encode the header in its on-disk form."""
        return _pack(
            self._LAYOUT,
            (
                self.magic,
                self.section_count,
                self.timestamp,
                self.symbol_pointer,
                self.symbol_count,
                self.optional_header_size,
                self.flags,
            ),
            "file header",
        )


@dataclass
class AoutHeader:
    """The optional (system) header describing the executable layout."""

    magic: int = OMAGIC
    version_stamp: int = 0
    text_size: int = 0
    data_size: int = 0
    bss_size: int = 0
    entry: int = 0
    text_start: int = 0
    data_start: int = 0
    bss_start: int = 0
    gpr_mask: int = 0
    cpr_masks: Tuple[int, int, int, int] = (0, 0, 0, 0)
    gp_value: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<hhiiiiiiiIIIIIi")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def unpack(cls, data: bytes) -> "AoutHeader":
        """Decode a system header from the start of ``data``."""
        values = _unpack(cls._LAYOUT, data, "system header")
        return cls(*values[:10], cpr_masks=tuple(values[10:14]), gp_value=values[14])

    def pack(self) -> bytes:
        """Encode the header in its on-disk form."""
        masks = tuple(self.cpr_masks)
        if len(masks) != 4:
            raise CoffError(f"expected 4 co-processor masks, got {len(masks)}")
        return _pack(
            self._LAYOUT,
            (
                self.magic,
                self.version_stamp,
                self.text_size,
                self.data_size,
                self.bss_size,
                self.entry,
                self.text_start,
                self.data_start,
                self.bss_start,
                self.gpr_mask,
                *masks,
                self.gp_value,
            ),
            "system header",
        )


@dataclass
class SectionHeader:
    """One entry of the section table."""

    name: str
    physical_address: int = 0
    virtual_address: int = 0
    size: int = 0
    file_offset: int = 0
    relocation_offset: int = 0
    line_number_offset: int = 0
    relocation_count: int = 0
    line_number_count: int = 0
    flags: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<8sIIIIIIHHI")
    SIZE: ClassVar[int] = _LAYOUT.size
    NAME_LENGTH: ClassVar[int] = 8

    @classmethod
    def unpack(cls, data: bytes) -> "SectionHeader":
        """Decode a section header from the start of ``data``."""
        raw_name, *rest = _unpack(cls._LAYOUT, data, "section header")
        name = raw_name.split(b"\0", 1)[0].decode("latin-1")
        return cls(name, *rest)

    def pack(self) -> bytes:
        """Encode the header in its on-disk form."""
        try:
            raw_name = self.name.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise CoffError(f"section name {self.name!r} is not encodable") from exc
        if len(raw_name) > self.NAME_LENGTH:
            raise CoffError(
                f"section name {self.name!r} is longer than {self.NAME_LENGTH} bytes"
            )
        return _pack(
            self._LAYOUT,
            (
                raw_name,
                self.physical_address,
                self.virtual_address,
                self.size,
                self.file_offset,
                self.relocation_offset,
                self.line_number_offset,
                self.relocation_count,
                self.line_number_count,
                self.flags,
            ),
            "section header",
        )