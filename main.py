# Import relevant libraries
from qrinput import QRInput, InvalidDataError, DataTooLargeError
from qrspec import MODES, MODE_8, EC_LEVELS, QRSPEC_VERSION_MAX, get_data_length


def to_codewords(bitstream: str) -> list[int]:
    """
    Split a bitstream into data codewords.

    @param bitstream: String of binary digits, a multiple of 8 long
    @return: List of codeword values
    """
    return [int(bitstream[i:i+8], 2) for i in range(0, len(bitstream), 8)]


def ask_choice(prompt: str, choices, default: str) -> str:
    """
    Prompt until the user enters one of the given choices.

    An empty answer selects the default.

    @param prompt: Question to show
    @param choices: Accepted answers
    @param default: Answer used for empty input
    @return: The chosen value
    """
    while True:
        answer = input(prompt).strip() or default
        for choice in choices:
            if answer.lower() == choice.lower():
                return choice
        print(f"Please enter one of: {', '.join(choices)}")


def ask_version() -> int:
    while True:
        answer = input(f"QR version (1-{QRSPEC_VERSION_MAX}, blank for automatic): ").strip()
        if not answer:
            return 0
        if answer.isdecimal() and 0 <= int(answer) <= QRSPEC_VERSION_MAX:
            return int(answer)
        print(f"Version must be a number from 1 to {QRSPEC_VERSION_MAX}.")


def main():
    """
    Main entry point for the data encoding program.

    Handles user interaction and the encoding workflow:
    1. Text input collection
    2. Mode, error correction level and version selection
    3. Data bitstream construction
    4. Data codeword output
    """
    text = input("Enter text to encode: ")

    mode = ask_choice(f"Encoding mode ({', '.join(MODES)}) [{MODE_8}]: ", MODES, MODE_8)
    level = ask_choice(f"Error correction level ({', '.join(EC_LEVELS)}) [L]: ", EC_LEVELS, 'L')
    version = ask_version()

    # Ask the user if they want to see the process of the encoding.
    explain = input("Would you like to see the step-by-step of the encoding? (y/n): ").strip().lower() == 'y'

    qr_input = QRInput(version, level)
    try:
        qr_input.append(mode, text)
    except InvalidDataError:
        print(f"The input cannot be encoded in {mode} mode")
        return

    # Step 1. Convert the input text to a QR data bitstream.
    try:
        bitstream = qr_input.get_bit_stream().to_bitstring()
    except DataTooLargeError:
        print(f"The input is too long for a Version {QRSPEC_VERSION_MAX}-{level} QR Code")
        return

    version = qr_input.get_version()
    print(f"Using Version {version}-{level} QR Code! ({get_data_length(version, level)} data codewords)")
    if explain:
        print("\nStep 1: Data bitstream.")
        print(bitstream)
        input("Press Enter to continue...")

    # Step 2. Split the bitstream into data codewords (bytes).
    data_cw = to_codewords(bitstream)
    if explain:
        print("\nStep 2: Data codewords (bytes).")
    print(data_cw)


if __name__ == '__main__':
    main()
