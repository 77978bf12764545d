"""
QR code input data.

Holds the ordered list of data segments for one symbol and converts them
into the padded data codeword stream: mode indicator, length indicator and
packed payload per segment, followed by terminator and pad codewords.
"""

from bitstream import BitStream
from qrspec import (
    MODE_NUM, MODE_AN, MODE_8, MODE_KANJI, MODES, MODE_INDICATORS, EC_LEVELS,
    QRSPEC_VERSION_MAX, length_indicator, maximum_words, get_data_length,
    get_minimum_version, next_length_group
)

# Pad codewords, used alternately after the terminator
PAD_CODEWORDS = (0xEC, 0x11)

# Alphanumeric character set, in value order (JIS X0510:2004, pp.19)
AN_CHARS = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:'
AN_TABLE = {ord(c): value for value, c in enumerate(AN_CHARS)}

# Text encodings used when a segment is given as str
TEXT_ENCODINGS = {
    MODE_NUM: 'ascii',
    MODE_AN: 'ascii',
    MODE_8: 'utf-8',
    MODE_KANJI: 'shift_jis',
}


class InvalidDataError(ValueError):
    """Data contains a character the requested mode cannot encode."""


class DataTooLargeError(ValueError):
    """Data does not fit in any symbol version at the requested level."""


# Numeric data

def check_mode_num(data: bytes) -> bool:
    return all(0x30 <= b <= 0x39 for b in data)


def estimate_bits_mode_num(size: int) -> int:
    """
    Estimate the payload length of numeric data.

    Every three digits take 10 bits; a trailing one or two digits take 4 or
    7 bits.

    @param size: Number of digits
    @return: Number of bits, excluding mode and length indicators
    """
    words = size // 3
    return words * 10 + (0, 4, 7)[size - words * 3]


def encode_mode_num(data: bytes, version: int) -> BitStream:
    """
    Convert numeric data to a bit stream.

    @param data: ASCII digits
    @param version: QR code version selecting the length indicator width
    @return: Mode indicator, length indicator and packed digits
    """
    words = len(data) // 3
    bstream = BitStream(MODE_INDICATORS[MODE_NUM])
    bstream.append_num(length_indicator(MODE_NUM, version), len(data))

    for i in range(words):
        bstream.append_num(10, int(data[i*3:i*3+3]))

    rest = len(data) - words * 3
    if rest == 1:
        bstream.append_num(4, int(data[words*3:]))
    elif rest == 2:
        bstream.append_num(7, int(data[words*3:]))
    return bstream


# Alphanumeric data

def check_mode_an(data: bytes) -> bool:
    return all(b in AN_TABLE for b in data)


def estimate_bits_mode_an(size: int) -> int:
    return (size // 2) * 11 + (6 if size & 1 else 0)


def encode_mode_an(data: bytes, version: int) -> BitStream:
    """
    Convert alphanumeric data to a bit stream.

    Characters are packed in pairs as 45 * first + second in 11 bits; an odd
    trailing character takes 6 bits.

    @param data: Characters from the 45 symbol set
    @param version: QR code version selecting the length indicator width
    @return: Mode indicator, length indicator and packed characters
    """
    words = len(data) // 2
    bstream = BitStream(MODE_INDICATORS[MODE_AN])
    bstream.append_num(length_indicator(MODE_AN, version), len(data))

    for i in range(words):
        val = AN_TABLE[data[i*2]] * 45 + AN_TABLE[data[i*2+1]]
        bstream.append_num(11, val)

    if len(data) & 1:
        bstream.append_num(6, AN_TABLE[data[-1]])
    return bstream


# 8 bit data

def check_mode_8(data: bytes) -> bool:
    return True


def estimate_bits_mode_8(size: int) -> int:
    return size * 8


def encode_mode_8(data: bytes, version: int) -> BitStream:
    bstream = BitStream(MODE_INDICATORS[MODE_8])
    bstream.append_num(length_indicator(MODE_8, version), len(data))
    bstream.append_bytes(data)
    return bstream


# Kanji data

def _kanji_code_points(data: bytes):
    return [(data[i] << 8) | data[i+1] for i in range(0, len(data), 2)]


def check_mode_kanji(data: bytes) -> bool:
    """
    Check that data is a sequence of Shift JIS double byte characters.

    @param data: Big endian code points, two bytes each
    @return: True if the size is even and every code point is in range
    """
    if len(data) & 1:
        return False
    for val in _kanji_code_points(data):
        if val < 0x8140 or 0x9FFC < val < 0xE040 or val > 0xEBBF:
            return False
    return True


def estimate_bits_mode_kanji(size: int) -> int:
    return (size // 2) * 13


def encode_mode_kanji(data: bytes, version: int) -> BitStream:
    """
    Convert kanji data to a bit stream.

    The length indicator counts characters, not bytes. Each code point is
    shifted down to zero, then its high byte is folded as high * 0xC0 + low
    and packed in 13 bits.

    @param data: Shift JIS code points, two bytes each
    @param version: QR code version selecting the length indicator width
    @return: Mode indicator, length indicator and packed characters
    """
    bstream = BitStream(MODE_INDICATORS[MODE_KANJI])
    bstream.append_num(length_indicator(MODE_KANJI, version), len(data) // 2)

    for val in _kanji_code_points(data):
        if val <= 0x9FFC:
            val -= 0x8140
        else:
            val -= 0xC140
        val = (val >> 8) * 0xC0 + (val & 0xFF)
        bstream.append_num(13, val)
    return bstream


CHECKERS = {
    MODE_NUM: check_mode_num,
    MODE_AN: check_mode_an,
    MODE_8: check_mode_8,
    MODE_KANJI: check_mode_kanji,
}

ESTIMATORS = {
    MODE_NUM: estimate_bits_mode_num,
    MODE_AN: estimate_bits_mode_an,
    MODE_8: estimate_bits_mode_8,
    MODE_KANJI: estimate_bits_mode_kanji,
}

ENCODERS = {
    MODE_NUM: encode_mode_num,
    MODE_AN: encode_mode_an,
    MODE_8: encode_mode_8,
    MODE_KANJI: encode_mode_kanji,
}


def check(mode: str, data: bytes) -> bool:
    """
    Validate data against the character set of a mode.

    @param mode: Encoding mode
    @param data: Raw segment data
    @return: True if every character can be encoded in the mode
    """
    if mode not in CHECKERS:
        raise ValueError(f"Unknown encoding mode: {mode!r}")
    return CHECKERS[mode](data)


def estimate_bit_stream_size_of_entry(mode: str, size: int, version: int) -> int:
    """
    Estimate the encoded length of one segment at a given version.

    Adds a mode and length indicator for every chunk of 2**L bits, where L
    is the length indicator width, to cover segments that must be split.

    @param mode: Encoding mode
    @param size: Segment size in bytes
    @param version: Candidate version (0 = smallest)
    @return: Number of bits
    """
    bits = ESTIMATORS[mode](size)
    l = length_indicator(mode, version)
    m = 1 << l
    num = (bits + m - 1) // m
    return bits + num * (4 + l)


def encode_bit_stream(mode: str, data: bytes, version: int) -> BitStream:
    """
    Encode one segment, splitting it when its length indicator overflows.

    A segment longer than the maximum word count for its mode and version
    is cut into a head of exactly that many words and the remaining tail.
    Both are encoded on their own, each with its own mode and length
    indicator, and the tail is split again if it is still too long.

    @param mode: Encoding mode
    @param data: Validated segment data
    @param version: QR code version
    @return: Encoded bit stream, head chunks first
    """
    words = maximum_words(mode, version)
    if mode == MODE_KANJI:
        words *= 2
    if len(data) > words:
        bstream = BitStream()
        bstream.append(encode_bit_stream(mode, data[:words], version))
        bstream.append(encode_bit_stream(mode, data[words:], version))
        return bstream
    return ENCODERS[mode](data, version)


def create_padding_bit(bits: int, maxwords: int):
    """
    Create the terminator and pad codewords following the data.

    With fewer than 5 bits of room left only zero bits are added. Otherwise
    the data is zero filled up to a byte boundary and the remaining bytes are
    filled with 0xEC and 0x11 alternately.

    @param bits: Length of the merged data bit stream
    @param maxwords: Data capacity of the symbol in bytes
    @return: Padding bit stream, or None if the data fills the symbol
    """
    maxbits = maxwords * 8
    if bits > maxbits:
        raise DataTooLargeError(f"{bits} bits exceed the symbol capacity of {maxbits} bits")
    if bits == maxbits:
        return None

    bstream = BitStream()
    if maxbits - bits < 5:
        bstream.append_num(maxbits - bits, 0)
        return bstream

    words = (bits + 7) // 8
    bstream.append_num(words * 8 - bits, 0)
    for i in range(maxwords - words):
        bstream.append_num(8, PAD_CODEWORDS[i % 2])
    return bstream


class Segment:
    """
    One run of input data in a single mode.

    `bstream` holds the encoding for the job's current version and is
    replaced on every conversion pass.
    """

    def __init__(self, mode: str, data: bytes):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidDataError(f"Invalid data for {mode} mode: expected bytes, got {type(data).__name__}")
        data = bytes(data)
        if not check(mode, data):
            raise InvalidDataError(f"Invalid data for {mode} mode")
        self.mode = mode
        self.data = data
        self.bstream = None

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self):
        return f'Segment({self.mode!r}, {self.data!r})'


class QRInput:
    """
    Input data for one QR code symbol.

    Segments are encoded in the order they were appended. A version of 0
    lets the smallest fitting version be chosen; a non-zero version is a
    lower bound and is raised when the data needs a larger symbol.
    """

    def __init__(self, version: int = 0, level: str = 'L'):
        self.segments = []
        self.version = 0
        self.level = 'L'
        self.set_version(version)
        self.set_error_correction_level(level)

    def get_version(self) -> int:
        return self.version

    def set_version(self, version: int):
        if version < 0 or version > QRSPEC_VERSION_MAX:
            raise ValueError(f"Version out of range: {version}")
        self.version = version

    def get_error_correction_level(self) -> str:
        return self.level

    def set_error_correction_level(self, level: str):
        if level not in EC_LEVELS:
            raise ValueError(f"Unknown error correction level: {level!r}")
        self.level = level

    def append(self, mode: str, data):
        """
        Validate data and append it as a new segment.

        Text is encoded as ASCII for numeric and alphanumeric modes, UTF-8
        for byte mode and Shift JIS for kanji mode.

        @param mode: Encoding mode
        @param data: bytes, bytearray or str
        @return: The appended segment
        """
        if mode not in MODES:
            raise ValueError(f"Unknown encoding mode: {mode!r}")
        if isinstance(data, str):
            try:
                data = data.encode(TEXT_ENCODINGS[mode])
            except UnicodeEncodeError as e:
                raise InvalidDataError(f"Invalid data for {mode} mode") from e
        segment = Segment(mode, data)
        self.segments.append(segment)
        return segment

    def estimate_bit_stream_size(self, version: int) -> int:
        return sum(estimate_bit_stream_size_of_entry(s.mode, s.size, version)
                   for s in self.segments)

    def estimate_version(self) -> int:
        """
        Estimate the smallest version that holds the data.

        Length indicators widen with the version, so the estimate is redone
        at each new candidate until the candidate stops growing.

        An estimate that no version can hold does not fail at once. The
        search jumps to the first version of the next length indicator
        group, where wider indicators lower the split overhead and the data
        may still fit. Only an estimate too large at the largest version
        fails.

        @return: Estimated version
        """
        version = 0
        while True:
            bits = self.estimate_bit_stream_size(version)
            new = get_minimum_version((bits + 7) // 8, self.level)
            if new is None:
                if version >= QRSPEC_VERSION_MAX:
                    raise DataTooLargeError(
                        f"Input of about {bits} bits does not fit any version at level {self.level}")
                new = next_length_group(version)
            elif new <= version:
                return version
            version = new

    def create_bit_stream(self) -> int:
        """
        Encode every segment at the current version.

        @return: Total length of the encoded segments in bits
        """
        bits = 0
        for segment in self.segments:
            segment.bstream = encode_bit_stream(segment.mode, segment.data, self.version)
            bits += segment.bstream.size()
        return bits

    def convert_data(self):
        """
        Encode all segments, raising the version until the result fits.

        The encoded length can differ from the estimate, so the minimum
        version is checked again after every pass.
        """
        version = self.estimate_version()
        if version > self.version:
            self.version = version

        while True:
            bits = self.create_bit_stream()
            version = get_minimum_version((bits + 7) // 8, self.level)
            if version is None:
                raise DataTooLargeError(
                    f"Input of {bits} bits does not fit any version at level {self.level}")
            if version > self.version:
                self.version = version
            else:
                break

    def merge_bit_stream(self) -> BitStream:
        """
        Convert the input and concatenate the segment bit streams.
        """
        self.convert_data()
        bstream = BitStream()
        for segment in self.segments:
            bstream.append(segment.bstream)
        return bstream

    def get_bit_stream(self) -> BitStream:
        """
        Merge all segment bit streams and append the padding bits.

        @return: Bit stream filling the data capacity of the symbol exactly
        """
        bstream = self.merge_bit_stream()
        maxwords = get_data_length(self.version, self.level)
        bstream.append(create_padding_bit(bstream.size(), maxwords))
        return bstream

    def get_byte_stream(self) -> bytes:
        """
        Pack the padded bit stream into data codewords.

        @return: Data codewords for the chosen version and level
        """
        return self.get_bit_stream().to_bytes()
