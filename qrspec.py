"""
QR code symbol table.

Version and mode dependent constants from ISO/IEC 18004: length indicator
widths, data capacity per version and error correction level.
"""

QRSPEC_VERSION_MAX = 40

# Encoding modes
MODE_NUM = 'numeric'
MODE_AN = 'alphanumeric'
MODE_8 = 'byte'
MODE_KANJI = 'kanji'

MODES = (MODE_NUM, MODE_AN, MODE_8, MODE_KANJI)

MODE_INDICATORS = {
    MODE_NUM: '0001',
    MODE_AN: '0010',
    MODE_8: '0100',
    MODE_KANJI: '1000',
}

# Error correction levels, lowest redundancy first
EC_LEVELS = ('L', 'M', 'Q', 'H')

# First versions of the second and third length indicator groups
LENGTH_GROUP_STARTS = (10, 27)

# Length indicator bits for versions 1-9, 10-26 and 27-40
LENGTH_TABLE_BITS = {
    MODE_NUM: (10, 12, 14),
    MODE_AN: (9, 11, 13),
    MODE_8: (8, 16, 16),
    MODE_KANJI: (8, 10, 12),
}

# Number of data codewords, indexed by version (index 0 unused)
DATA_CODEWORDS = {
    'L': (0, 19, 34, 55, 80, 108, 136, 156, 194, 232, 274, 324, 370, 428, 461,
          523, 589, 647, 721, 795, 861, 932, 1006, 1094, 1174, 1276, 1370,
          1468, 1531, 1631, 1735, 1843, 1955, 2071, 2191, 2306, 2434, 2566,
          2702, 2812, 2956),
    'M': (0, 16, 28, 44, 64, 86, 108, 124, 154, 182, 216, 254, 290, 334, 365,
          415, 453, 507, 563, 627, 669, 714, 782, 860, 914, 1000, 1062, 1128,
          1193, 1267, 1373, 1455, 1541, 1631, 1725, 1812, 1914, 1992, 2102,
          2216, 2334),
    'Q': (0, 13, 22, 34, 48, 62, 76, 88, 110, 132, 154, 180, 206, 244, 261,
          295, 325, 367, 397, 445, 485, 512, 568, 614, 664, 718, 754, 808, 871,
          911, 985, 1033, 1115, 1171, 1231, 1286, 1354, 1426, 1502, 1582,
          1666),
    'H': (0, 9, 16, 26, 36, 46, 60, 66, 86, 100, 122, 140, 158, 180, 197, 223,
          253, 283, 313, 341, 385, 406, 442, 464, 514, 538, 596, 628, 661, 701,
          745, 793, 845, 901, 961, 986, 1054, 1096, 1142, 1222, 1276),
}


def _check_mode(mode):
    if mode not in LENGTH_TABLE_BITS:
        raise ValueError(f"Unknown encoding mode: {mode!r}")


def _check_level(level):
    if level not in DATA_CODEWORDS:
        raise ValueError(f"Unknown error correction level: {level!r}")


def length_indicator(mode: str, version: int) -> int:
    """
    Return the width of the character count indicator.

    Version 0 means "not yet determined" and is treated like the smallest
    symbols (versions 1-9).

    @param mode: Encoding mode
    @param version: QR code version (0-40)
    @return: Number of bits in the length indicator
    """
    _check_mode(mode)
    if version < 0 or version > QRSPEC_VERSION_MAX:
        raise ValueError(f"Version out of range: {version}")
    group = sum(1 for start in LENGTH_GROUP_STARTS if version >= start)
    return LENGTH_TABLE_BITS[mode][group]


def maximum_words(mode: str, version: int) -> int:
    """
    Return the largest element count a single length indicator can hold.

    Elements are characters, or character pairs (two bytes) in kanji mode.
    """
    return (1 << length_indicator(mode, version)) - 1


def get_data_length(version: int, level: str) -> int:
    """
    Return the number of data codewords (bytes) a symbol can carry.

    @param version: QR code version (1-40)
    @param level: Error correction level
    @return: Data capacity in bytes
    """
    _check_level(level)
    if version < 1 or version > QRSPEC_VERSION_MAX:
        raise ValueError(f"Version out of range: {version}")
    return DATA_CODEWORDS[level][version]


def get_minimum_version(size: int, level: str):
    """
    Find the smallest version whose data capacity holds `size` bytes.

    @param size: Number of data bytes
    @param level: Error correction level
    @return: Version number, or None if no version is large enough
    """
    _check_level(level)
    for version in range(1, QRSPEC_VERSION_MAX + 1):
        if DATA_CODEWORDS[level][version] >= size:
            return version
    return None


def next_length_group(version: int) -> int:
    """
    Return the first version after `version` with wider length indicators.

    Past the last group this is the largest version.
    """
    for start in LENGTH_GROUP_STARTS:
        if start > version:
            return start
    return QRSPEC_VERSION_MAX
