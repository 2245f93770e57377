"""The header of an object file in the simplified NOFF format."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional

NOFFMAGIC = 0xBADFAD
"""Magic number that marks a NOFF object file."""

__all__ = ["NOFFMAGIC", "Segment", "NoffHeader"]

_WORD = struct.Struct("<I")


@dataclass
class Segment:
    """Where a segment lives in the address space and in the file."""

    virtual_address: int = 0
    file_offset: int = 0
    size: int = 0

    SIZE: ClassVar[int] = struct.calcsize("<3I")


@dataclass
class NoffHeader:
    """A NOFF header: code, initialised data, optional read-only data and bss.

    The read-only data segment is part of the on-disk layout only when
    ``readonly_data`` is not ``None``.
    """

    code: Segment = field(default_factory=Segment)
    init_data: Segment = field(default_factory=Segment)
    uninit_data: Segment = field(default_factory=Segment)
    readonly_data: Optional[Segment] = None
    magic: int = NOFFMAGIC

    def _segments(self) -> Iterator[Segment]:
        yield self.code
        yield self.init_data
        if self.readonly_data is not None:
            yield self.readonly_data
        yield self.uninit_data

    @classmethod
    def size(cls, readonly_data: bool = False) -> int:
        """Length in bytes of an encoded header."""
        segments = 4 if readonly_data else 3
        return _WORD.size + Segment.SIZE * segments

    def pack(self) -> bytes:
        """Encode the header, always little-endian."""
        values = [self.magic]
        for segment in self._segments():
            values.extend((segment.virtual_address, segment.file_offset, segment.size))
        try:
            return struct.pack(f"<{len(values)}I", *values)
        except struct.error as exc:
            raise ValueError(f"cannot encode NOFF header: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes, readonly_data: bool = False) -> "NoffHeader":
        """Decode a header from the start of ``data``.

        A header written in big-endian order is recognised by its magic
        number and decoded accordingly. The magic number is not otherwise
        checked; callers compare ``magic`` with ``NOFFMAGIC``.
        """
        needed = cls.size(readonly_data)
        if len(data) < needed:
            raise ValueError(
                f"NOFF header is too short: need {needed} bytes, got {len(data)}"
            )
        order = "<"
        (magic,) = _WORD.unpack_from(data)
        if magic != NOFFMAGIC and struct.unpack_from(">I", data)[0] == NOFFMAGIC:
            order = ">"
        magic, *words = struct.unpack_from(f"{order}{needed // _WORD.size}I", data)
        it = iter(words)
        segments = [Segment(*triple) for triple in zip(it, it, it)]
        if readonly_data:
            code, init_data, readonly, uninit_data = segments
        else:
            code, init_data, uninit_data = segments
            readonly = None
        return cls(
            code=code,
            init_data=init_data,
            uninit_data=uninit_data,
            readonly_data=readonly,
            magic=magic,
        )