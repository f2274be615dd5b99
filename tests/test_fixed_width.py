import pytest

from textbind.fixed_width import Int8, Int16, Int64, UInt8, UInt16, UInt32, UInt64


def test_values_within_range_behave_as_ints():
    value = Int8(-128)
    assert value == -128
    assert isinstance(value, int)
    assert Int16(32767) + 1 == 32768


@pytest.mark.parametrize(
    "shape, minimum, maximum",
    [
        (Int8, -128, 127),
        (UInt8, 0, 255),
        (UInt16, 0, 65535),
        (UInt32, 0, 4294967295),
        (Int64, -9223372036854775808, 9223372036854775807),
        (UInt64, 0, 18446744073709551615),
    ],
)
def test_bounds(shape, minimum, maximum):
    assert shape(minimum) == minimum
    assert shape(maximum) == maximum
    with pytest.raises(OverflowError, match=shape.__name__):
        shape(minimum - 1)
    with pytest.raises(OverflowError, match=shape.__name__):
        shape(maximum + 1)
