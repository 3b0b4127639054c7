"""
Stateful LZ78 model: keeps the encoded pairs, the rebuilt dictionary and
the sizes of the last compression or decompression run.
"""
import logging
from typing import Optional

from text_compression import compression_stats
from text_compression.compressor_ABC import ENCODING, Compressor
from text_compression.errors import DomainError, TypeMismatch
from text_compression.LZ78 import (
    EncodedPair,
    build_dictionary,
    decode,
    encode,
    encoded_to_string,
    estimate_compressed_size,
    string_to_encoded,
)

logger = logging.getLogger(__name__)


class LZ78Compressor(Compressor):
    """A class for LZ78 compression and decompression of text"""

    def __init__(self, deduplicate_dictionary: bool = False):
        """
        :param deduplicate_dictionary: bool, rebuild the displayed dictionary
            without registering strings that are already in it
        """
        self.deduplicate_dictionary = deduplicate_dictionary
        self.reset()

    def reset(self):
        """Forgets everything about the previous run."""
        self.dictionary: list[tuple[int, str]] = []
        self.encoded_data: Optional[list[EncodedPair]] = None
        self.original_text = ""
        self.decompressed_text = ""
        self.original_size = 0
        self.compressed_size = 0
        self.decompressed_size = 0
        self.last_operation = None

    def compress(self, text: str) -> dict:
        """
        Compresses text with LZ78 and rebuilds the dictionary for display.

        :param text: str, text to compress
        :return: dict with compressed_data (pairs), dictionary and
            compressed_string (.lz78 text form)
        """
        if not isinstance(text, str):
            raise TypeMismatch(f"Text must be a string, got {type(text).__name__}")

        self.reset()
        self.original_text = text
        self.original_size = len(text.encode(ENCODING))
        self.last_operation = "compress"

        self.encoded_data = encode(text)
        self.dictionary = build_dictionary(
            self.encoded_data, deduplicate=self.deduplicate_dictionary
        )
        self.compressed_size = estimate_compressed_size(self.encoded_data)

        logger.debug(
            "Compressed %d bytes into %d pairs", self.original_size, len(self.encoded_data)
        )
        return {
            "compressed_data": self.encoded_data,
            "dictionary": self.get_dictionary(),
            "compressed_string": encoded_to_string(self.encoded_data),
        }

    def decompress(self, blob: str) -> dict:
        """
        Decompresses the .lz78 text form back into the original text.

        :param blob: str, content of a .lz78 file
        :return: dict with decompressed_text, dictionary and encoded_data
        """
        if not isinstance(blob, str):
            raise TypeMismatch(f"Compressed data must be a string, got {type(blob).__name__}")

        self.reset()
        encoded_data = string_to_encoded(blob)
        decompressed_text = decode(encoded_data)
        dictionary = build_dictionary(encoded_data, deduplicate=self.deduplicate_dictionary)

        # state is only updated once the whole blob decoded
        self.encoded_data = encoded_data
        self.decompressed_text = decompressed_text
        self.dictionary = dictionary
        self.compressed_size = estimate_compressed_size(encoded_data)
        self.decompressed_size = len(decompressed_text.encode(ENCODING))
        self.last_operation = "decompress"

        logger.debug(
            "Decompressed %d pairs into %d bytes", len(self.encoded_data), self.decompressed_size
        )
        return {
            "decompressed_text": self.decompressed_text,
            "dictionary": self.get_dictionary(),
            "encoded_data": self.encoded_data,
        }

    def serialize(self, result: dict) -> str:
        return result["compressed_string"]

    def get_dictionary(self) -> list[dict]:
        """
        Returns the dictionary of the last run as a list of
        {"index", "string"} rows sorted by index.
        """
        return [{"index": index, "string": string} for index, string in self.dictionary]

    def get_statistics(self) -> dict:
        """
        Returns size statistics of the last compress() call.
        """
        if self.last_operation != "compress" or self.original_size == 0:
            raise DomainError("No text was compressed, statistics are undefined")
        return compression_stats.calculate(self.original_size, self.compressed_size)

    def get_decompression_statistics(self) -> dict:
        """
        Returns size statistics of the last decompress() call.
        """
        if self.last_operation != "decompress" or self.compressed_size == 0:
            raise DomainError("No data was decompressed, statistics are undefined")
        return compression_stats.expansion(self.compressed_size, self.decompressed_size)
