"""
Bit stream used to assemble QR data codewords.

Bits are kept as a string of '0' and '1' characters, most significant bit
first, and packed into bytes at the end.
"""


def to_bitstring(data: bytes) -> str:
    """
    Convert a bytes object to a continuous bit string representation.

    @param data: Binary data to convert
    @return: String of binary digits representing the input data
    """
    return ''.join(f'{b:08b}' for b in data)


class BitStream:
    """Growable sequence of bits."""

    def __init__(self, bits: str = ''):
        self.bits = bits

    def __len__(self):
        return len(self.bits)

    def __eq__(self, other):
        if not isinstance(other, BitStream):
            return NotImplemented
        return self.bits == other.bits

    def __repr__(self):
        return f'BitStream({self.bits!r})'

    def size(self) -> int:
        return len(self.bits)

    def append_num(self, bits: int, num: int):
        """
        Append an unsigned number using exactly `bits` binary digits.

        @param bits: Field width
        @param num: Value to append, 0 <= num < 2**bits
        """
        if num < 0 or num >> bits:
            raise ValueError(f"{num} does not fit in {bits} bits")
        if bits:
            self.bits += f'{num:0{bits}b}'

    def append_bytes(self, data: bytes):
        self.bits += to_bitstring(data)

    def append(self, other):
        """
        Append another stream's bits in order. None is ignored.
        """
        if other is not None:
            self.bits += other.bits

    def to_bitstring(self) -> str:
        return self.bits

    def to_bytes(self) -> bytes:
        """
        Pack the bits into bytes.

        Unused low bits of the last byte are zero.

        @return: Packed bytes
        """
        bits = self.bits
        if len(bits) % 8:
            bits += '0' * (8 - len(bits) % 8)
        return bytes(int(bits[i:i+8], 2) for i in range(0, len(bits), 8))
