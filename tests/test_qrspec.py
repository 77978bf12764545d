import pytest

from qrspec import (
    MODE_NUM, MODE_AN, MODE_8, MODE_KANJI, EC_LEVELS, QRSPEC_VERSION_MAX,
    length_indicator, maximum_words, get_data_length, get_minimum_version,
    next_length_group
)


@pytest.mark.parametrize('mode, widths', [
    (MODE_NUM, (10, 12, 14)),
    (MODE_AN, (9, 11, 13)),
    (MODE_8, (8, 16, 16)),
    (MODE_KANJI, (8, 10, 12)),
])
def test_length_indicator_groups(mode, widths):
    assert length_indicator(mode, 0) == widths[0]
    assert length_indicator(mode, 1) == widths[0]
    assert length_indicator(mode, 9) == widths[0]
    assert length_indicator(mode, 10) == widths[1]
    assert length_indicator(mode, 26) == widths[1]
    assert length_indicator(mode, 27) == widths[2]
    assert length_indicator(mode, 40) == widths[2]


def test_maximum_words():
    assert maximum_words(MODE_NUM, 1) == 1023
    assert maximum_words(MODE_8, 1) == 255
    assert maximum_words(MODE_8, 10) == 65535
    assert maximum_words(MODE_KANJI, 1) == 255


def test_data_length():
    assert get_data_length(1, 'L') == 19
    assert get_data_length(1, 'M') == 16
    assert get_data_length(1, 'Q') == 13
    assert get_data_length(1, 'H') == 9
    assert get_data_length(40, 'L') == 2956
    assert get_data_length(40, 'H') == 1276


def test_data_length_grows_with_version():
    for level in EC_LEVELS:
        lengths = [get_data_length(v, level) for v in range(1, QRSPEC_VERSION_MAX + 1)]
        assert lengths == sorted(lengths)


def test_minimum_version():
    assert get_minimum_version(0, 'L') == 1
    assert get_minimum_version(19, 'L') == 1
    assert get_minimum_version(20, 'L') == 2
    assert get_minimum_version(2956, 'L') == 40
    assert get_minimum_version(2957, 'L') is None
    assert get_minimum_version(1277, 'H') is None


def test_bad_arguments():
    with pytest.raises(ValueError):
        length_indicator('binary', 1)
    with pytest.raises(ValueError):
        length_indicator(MODE_8, 41)
    with pytest.raises(ValueError):
        get_data_length(0, 'L')
    with pytest.raises(ValueError):
        get_minimum_version(10, 'X')


def test_next_length_group():
    assert next_length_group(0) == 10
    assert next_length_group(9) == 10
    assert next_length_group(10) == 27
    assert next_length_group(26) == 27
    assert next_length_group(27) == QRSPEC_VERSION_MAX
    assert next_length_group(QRSPEC_VERSION_MAX) == QRSPEC_VERSION_MAX
