from abc import ABC, abstractmethod
import logging
from pathlib import Path
from typing import Optional

from text_compression.errors import DomainError

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIX = ".lz78"
COMPRESSED_STEM_SUFFIX = "_compressed"
DECOMPRESSED_SUFFIX = ".txt"
DECOMPRESSED_STEM_SUFFIX = "_decompressed"
ENCODING = "utf-8"


class Compressor(ABC):
    """
    Interface for text compressors that keep the state of their last run
    and exchange compressed data as text.
    """

    @abstractmethod
    def compress(self, text: str) -> dict:
        """
        Compresses the given text.

        Args:
            text: Text to compress

        Returns:
            Dict with the encoded data and everything needed to display it
        """

    @abstractmethod
    def decompress(self, blob: str) -> dict:
        """
        Decompresses data produced by compress().

        Args:
            blob: Compressed data in its textual form

        Returns:
            Dict with the reconstructed text under "decompressed_text" and
            everything needed to display it
        """

    @abstractmethod
    def serialize(self, result: dict) -> str:
        """Returns the textual form of a compress() result."""

    @classmethod
    def compress_file(cls, input_file: str, output_file: Optional[str] = None, **kwargs) -> tuple[Path, "Compressor"]:
        """
        Helper method for compressing a UTF-8 text file.

        Args:
            input_file: Path to the input text file
            output_file: Path to the output file, "<stem>_compressed.lz78"
                beside the input when omitted
            **kwargs: Passed to the compressor constructor

        Returns:
            Tuple (output path, compressor holding the state of the run)

        Raises:
            DomainError: The input file is empty, nothing is written
        """
        input_path = Path(input_file)
        if output_file is None:
            output_path = input_path.with_name(
                input_path.stem + COMPRESSED_STEM_SUFFIX + COMPRESSED_SUFFIX
            )
        else:
            output_path = Path(output_file)

        with open(input_path, "r", encoding=ENCODING, newline="") as in_file:
            text = in_file.read()
        if not text:
            raise DomainError(f"Input file {input_path} is empty")

        compressor = cls(**kwargs)
        result = compressor.compress(text)

        with open(output_path, "w", encoding=ENCODING, newline="") as out_file:
            out_file.write(compressor.serialize(result))

        logger.info("Compressed %s into %s", input_path, output_path)
        return output_path, compressor

    @classmethod
    def decompress_file(cls, input_file: str, output_file: Optional[str] = None, **kwargs) -> tuple[Path, "Compressor"]:
        """
        Helper method for decompressing a file written by compress_file().

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file, "<stem>_decompressed.txt"
                beside the input when omitted
            **kwargs: Passed to the compressor constructor

        Returns:
            Tuple (output path, compressor holding the state of the run)

        Raises:
            DomainError: The input file is empty, nothing is written
        """
        input_path = Path(input_file)
        if output_file is None:
            output_path = input_path.with_name(
                input_path.stem + DECOMPRESSED_STEM_SUFFIX + DECOMPRESSED_SUFFIX
            )
        else:
            output_path = Path(output_file)

        with open(input_path, "r", encoding=ENCODING, newline="") as in_file:
            blob = in_file.read()
        if not blob.strip():
            raise DomainError(f"Compressed file {input_path} is empty")

        compressor = cls(**kwargs)
        result = compressor.decompress(blob)

        with open(output_path, "w", encoding=ENCODING, newline="") as out_file:
            out_file.write(result["decompressed_text"])

        logger.info("Decompressed %s into %s", input_path, output_path)
        return output_path, compressor
