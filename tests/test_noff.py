import struct

import pytest

from noffkit.noff import NOFFMAGIC, NoffHeader, Segment


def test_packed_header_starts_with_little_endian_magic():
    raw = NoffHeader().pack()
    assert raw[:4] == NOFFMAGIC.to_bytes(4, "little")


def test_size_matches_packed_length():
    assert NoffHeader.size() == len(NoffHeader().pack())
    assert NoffHeader.size(True) == len(NoffHeader(readonly_data=Segment()).pack())


def test_readonly_layout_adds_one_segment():
    assert NoffHeader.size(True) - NoffHeader.size(False) == Segment.SIZE


def test_round_trip_without_readonly():
    header = NoffHeader(
        code=Segment(0, 40, 0x200),
        init_data=Segment(0x200, 0x228, 0x40),
        uninit_data=Segment(0x240, 0, 0x20),
    )
    decoded = NoffHeader.unpack(header.pack())
    assert decoded == header
    assert decoded.readonly_data is None


def test_round_trip_with_readonly():
    header = NoffHeader(
        code=Segment(0, 52, 0x100),
        init_data=Segment(0x100, 0x134, 0x10),
        uninit_data=Segment(0x200, 0, 0x8),
        readonly_data=Segment(0x180, 0x144, 0x30),
    )
    assert NoffHeader.unpack(header.pack(), readonly_data=True) == header


def test_field_order_on_disk():
    header = NoffHeader(
        code=Segment(1, 2, 3),
        init_data=Segment(4, 5, 6),
        uninit_data=Segment(7, 8, 9),
    )
    words = struct.unpack("<10I", header.pack())
    assert words == (NOFFMAGIC, 1, 2, 3, 4, 5, 6, 7, 8, 9)


def test_readonly_segment_sits_before_uninit():
    header = NoffHeader(
        code=Segment(1, 2, 3),
        init_data=Segment(4, 5, 6),
        uninit_data=Segment(10, 11, 12),
        readonly_data=Segment(7, 8, 9),
    )
    words = struct.unpack("<13I", header.pack())
    assert words[7:10] == (7, 8, 9)
    assert words[10:] == (10, 11, 12)


def test_big_endian_header_is_recognised():
    raw = struct.pack(">10I", NOFFMAGIC, 1, 2, 3, 4, 5, 6, 7, 8, 9)
    header = NoffHeader.unpack(raw)
    assert header.magic == NOFFMAGIC
    assert header.code == Segment(1, 2, 3)
    assert header.init_data == Segment(4, 5, 6)
    assert header.uninit_data == Segment(7, 8, 9)


def test_unknown_magic_is_reported_as_read():
    raw = struct.pack("<10I", 0x1234, *range(9))
    assert NoffHeader.unpack(raw).magic == 0x1234


def test_trailing_bytes_are_ignored():
    header = NoffHeader(code=Segment(0, 40, 8))
    assert NoffHeader.unpack(header.pack() + b"\xff" * 8) == header


def test_too_short():
    with pytest.raises(ValueError):
        NoffHeader.unpack(NoffHeader().pack()[:-1])


def test_readonly_layout_needs_more_bytes():
    with pytest.raises(ValueError):
        NoffHeader.unpack(NoffHeader().pack(), readonly_data=True)


def test_negative_value_cannot_be_packed():
    with pytest.raises(ValueError):
        NoffHeader(code=Segment(-1, 0, 0)).pack()