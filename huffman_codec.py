# filename: huffman_codec.py

import argparse
import logging
import sys
from types import MappingProxyType
from typing import NamedTuple

from huffman_core import build_code_tables

logger = logging.getLogger(__name__)

DEFAULT_CORPUS = "huffman coding algorithm"


class HuffmanError(ValueError):
    """Base class for encode/decode failures."""


class UnknownSymbol(HuffmanError):
    def __init__(self, char, position):
        super().__init__(f"character {char!r} at position {position} is not in the code table")
        self.char = char
        self.position = position


class IncompleteCode(HuffmanError):
    def __init__(self, pending, position):
        super().__init__(f"digits {pending!r} starting at position {position} do not form a complete code")
        self.pending = pending
        self.position = position


class InvalidDigit(HuffmanError):
    def __init__(self, digit, position):
        super().__init__(f"invalid digit {digit!r} at position {position}, expected '0' or '1'")
        self.digit = digit
        self.position = position


class CompressionStats(NamedTuple):
    chars: int
    fixed_bits: int
    encoded_bits: int
    ratio: float


class HuffmanCodec:
    """Prefix-free code derived from the character frequencies of a corpus.

    The tables are built once in the constructor and only read afterwards,
    so one instance can be shared between threads.
    """

    def __init__(self, corpus):
        if not isinstance(corpus, str):
            raise TypeError(f"corpus must be a str, not {type(corpus).__name__}")
        freqs, encoding, decoding = build_code_tables(corpus)
        self._freqs = MappingProxyType(dict(freqs))
        self._encoding = MappingProxyType(encoding)
        self._decoding = MappingProxyType(decoding)
        # No code in the table is longer than this
        self._max_code_len = max(map(len, decoding), default=0)
        logger.debug("codec ready: %d symbols from %d corpus characters", len(encoding), len(corpus))

    @property
    def frequencies(self):
        return self._freqs

    @property
    def encoding_table(self):
        return self._encoding

    @property
    def decoding_table(self):
        return self._decoding

    def encode(self, text):
        codes = self._encoding
        out = []
        for position, char in enumerate(text):
            code = codes.get(char)
            if code is None:
                raise UnknownSymbol(char, position)
            out.append(code)
        return "".join(out)

    def decode(self, bits):
        """Turn a string of '0'/'1' digits back into text.

        Digits are accumulated until the buffer equals a stored code. Since no
        code is a prefix of another, the first match is the only one possible.
        A buffer that reaches the longest code length without matching can
        never match, so decoding stops there instead of reading on.
        """
        decoding = self._decoding
        decoded = []
        buffer = ""
        start = 0
        for position, digit in enumerate(bits):
            if digit != "0" and digit != "1":
                raise InvalidDigit(digit, position)
            if not buffer:
                start = position
            buffer += digit
            char = decoding.get(buffer)
            if char is not None:
                decoded.append(char)
                buffer = ""
            elif len(buffer) >= self._max_code_len:
                raise IncompleteCode(buffer, start)

        if buffer:
            raise IncompleteCode(buffer, start)
        return "".join(decoded)

    def weighted_length(self):
        # Total encoded size of the corpus itself
        return sum(freq * len(self._encoding[char]) for char, freq in self._freqs.items())

    def stats(self, text, char_bits=16):
        if char_bits < 1:
            raise ValueError(f"char_bits must be at least 1, got {char_bits}")
        encoded_bits = len(self.encode(text))
        fixed_bits = len(text) * char_bits
        ratio = encoded_bits / fixed_bits if fixed_bits else 0.0
        return CompressionStats(len(text), fixed_bits, encoded_bits, ratio)


def _positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def main(argv=None):
    """Demo driver: encode a sample text and decode it back."""
    parser = argparse.ArgumentParser(description="Encode and decode text with a Huffman code built from a corpus")
    parser.add_argument("--corpus", type=str, default=DEFAULT_CORPUS, help="Text the code is derived from")
    parser.add_argument("--text", type=str, default=None, help="Text to encode (default: the corpus)")
    parser.add_argument("--table", action="store_true", help="Print the code table")
    parser.add_argument("--stats", action="store_true", help="Compare the encoded size with fixed-width characters")
    parser.add_argument("--char-bits", type=_positive_int, default=16, help="Bits per character for the fixed-width comparison")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    text = args.corpus if args.text is None else args.text
    codec = HuffmanCodec(args.corpus)

    try:
        encoded = codec.encode(text)
        decoded = codec.decode(encoded)
    except HuffmanError as e:
        print(f"Error: {e}")
        return 1

    if args.table:
        for char, code in sorted(codec.encoding_table.items(), key=lambda item: (len(item[1]), item[1])):
            print(f"{char!r}: {code} ({codec.frequencies[char]})")

    print(f"Encoded: {encoded}")
    print(f"Decoded: {decoded}")

    if args.stats:
        stats = codec.stats(text, char_bits=args.char_bits)
        print(f"Characters: {stats.chars}")
        print(f"Fixed-width bits: {stats.fixed_bits}")
        print(f"Encoded bits: {stats.encoded_bits}")
        print(f"Ratio: {stats.ratio:.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
