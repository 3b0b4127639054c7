"""
Errors raised by the LZ78 and Huffman pipelines.
"""


class CompressionError(Exception):
    """Base class for every error raised by text_compression."""


class TypeMismatch(CompressionError, TypeError):
    """A non-text value was given where text (or a pair sequence) was required."""


class FormatError(CompressionError, ValueError):
    """
    A line of a persisted .lz78 blob does not parse into (index, char).

    :param message: str, description of the problem
    :param line_number: int, 1-based number of the offending line
    :param line: str, the offending line itself
    """

    def __init__(self, message: str, line_number: int = None, line: str = None):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class IndexOutOfRange(CompressionError, IndexError):
    """
    A decoded pair references a dictionary code that is not assigned yet.
    """

    def __init__(self, index: int, next_code: int, position: int):
        super().__init__(
            f"Invalid index {index} in pair {position}: "
            f"must be between 0 and {next_code - 1}"
        )
        self.index = index
        self.next_code = next_code
        self.position = position


class DomainError(CompressionError, ValueError):
    """Statistics were requested on degenerate input."""
