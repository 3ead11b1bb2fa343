import pytest

from bookpack.utils import ByteCursor, TruncatedDataError


def test_reads_little_endian_fields_in_sequence():
    cursor = ByteCursor(b"\x01\x02\x03\x04\x05\x06abc")

    assert cursor.read_u16() == 0x0201
    assert cursor.read_u32() == 0x06050403
    assert cursor.read_bytes(3) == b"abc"
    assert cursor.remaining == 0


def test_truncated_read_raises_and_keeps_position():
    cursor = ByteCursor(b"\x01\x02\x03")
    cursor.skip(1)

    with pytest.raises(TruncatedDataError):
        cursor.read_u32()
    assert cursor.position == 1
    assert cursor.read_u16() == 0x0302


def test_skip_and_seek_are_bounds_checked():
    cursor = ByteCursor(b"\x00" * 4)

    with pytest.raises(TruncatedDataError):
        cursor.skip(5)
    with pytest.raises(TruncatedDataError):
        cursor.seek(5)

    cursor.seek(4)
    assert cursor.remaining == 0


def test_start_position():
    cursor = ByteCursor(b"\xff\xff\x10\x00", position=2)
    assert cursor.read_u16() == 0x10
