"""Conversion of MIPS COFF executables to the NOFF format.

The input must be linked without shared text and may hold the sections
``.text``, ``.data`` and ``.bss`` (and ``.rdata`` when read-only data is
kept as a separate segment). The NOFF header is always written
little-endian, followed by the contents of the copied sections.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .coff import (
    MIPSELMAGIC,
    OMAGIC,
    AoutHeader,
    CoffError,
    FileHeader,
    SectionHeader,
)
from .noff import NoffHeader, Segment

__all__ = ["ConversionError", "convert", "convert_file", "main"]

_USAGE = "Usage: noffkit [--rdata] <coffFileName> <noffFileName>"
_RDATA_FLAG = "--rdata"


class ConversionError(ValueError):
    """Raised when a COFF file cannot be converted."""


def _read_sections(data: bytes) -> List[SectionHeader]:
    """Check the COFF headers and return the section table."""
    try:
        file_header = FileHeader.unpack(data)
    except CoffError as exc:
        raise ConversionError("File is too short") from exc
    if file_header.magic != MIPSELMAGIC:
        raise ConversionError("File is not a MIPSEL COFF file")

    try:
        system_header = AoutHeader.unpack(data[FileHeader.SIZE:])
    except CoffError as exc:
        raise ConversionError("File is too short") from exc
    if system_header.magic != OMAGIC:
        raise ConversionError("File is not a OMAGIC file")

    start = FileHeader.SIZE + AoutHeader.SIZE
    end = start + file_header.section_count * SectionHeader.SIZE
    if len(data) < end:
        raise ConversionError("File is too short")
    view = memoryview(data)
    return [
        SectionHeader.unpack(view[offset:])
        for offset in range(start, end, SectionHeader.SIZE)
    ]


def _report(sections: Sequence[SectionHeader]) -> None:
    print(f"numsections {len(sections)} ")
    print(f"Loading {len(sections)} sections:")
    for section in sections:
        print(
            f'\t"{section.name}", filepos {section.file_offset:#x}, '
            f"mempos {section.physical_address:#x}, size {section.size:#x}"
        )


def convert(coff_data: bytes, readonly_data: bool = False) -> bytes:
    """Convert the bytes of a COFF executable to the bytes of a NOFF file.

    With ``readonly_data`` the ``.rdata`` section becomes its own segment
    and the header carries room for it; otherwise ``.rdata`` is rejected.
    """
    data = bytes(coff_data)
    sections = _read_sections(data)

    header = NoffHeader(readonly_data=Segment() if readonly_data else None)
    copied = {".text": "code", ".data": "init_data"}
    if readonly_data:
        copied[".rdata"] = "readonly_data"

    body = bytearray()
    position = NoffHeader.size(readonly_data)
    for section in sections:
        if section.size == 0:
            continue
        if section.name in copied:
            payload = data[section.file_offset : section.file_offset + section.size]
            if len(payload) < section.size:
                raise ConversionError("File is too short")
            segment = Segment(section.physical_address, position, section.size)
            setattr(header, copied[section.name], segment)
            body += payload
            position += section.size
        elif section.name == ".bss":
            uninit = header.uninit_data
            if uninit.size:
                if section.physical_address == uninit.virtual_address + uninit.size:
                    raise ConversionError("Can't handle both bss and sbss")
                uninit.size += section.size
            else:
                header.uninit_data = Segment(section.physical_address, 0, section.size)
        else:
            raise ConversionError(f"Unknown segment type: {section.name}")

    return header.pack() + bytes(body)


def convert_file(
    coff_path, noff_path, readonly_data: bool = False
) -> NoffHeader:
    """Convert the file at ``coff_path`` and write the result to ``noff_path``.

    If conversion fails, ``noff_path`` is removed. Returns the written header.
    """
    source = Path(coff_path)
    target = Path(noff_path)
    data = source.read_bytes()
    try:
        noff = convert(data, readonly_data)
    except ConversionError:
        target.unlink(missing_ok=True)
        raise
    target.write_bytes(noff)
    return NoffHeader.unpack(noff, readonly_data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    readonly_data = _RDATA_FLAG in args
    paths = [arg for arg in args if arg != _RDATA_FLAG]
    if len(paths) < 2:
        print(_USAGE, file=sys.stderr)
        return 1
    coff_path, noff_path = Path(paths[0]), Path(paths[1])

    try:
        data = coff_path.read_bytes()
    except OSError as exc:
        print(f"{coff_path}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    try:
        _report(_read_sections(data))
        noff = convert(data, readonly_data)
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        noff_path.unlink(missing_ok=True)
        return 1

    try:
        noff_path.write_bytes(noff)
    except OSError:
        print("Unable to write file", file=sys.stderr)
        noff_path.unlink(missing_ok=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())