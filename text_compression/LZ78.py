"""LZ78 Compression and Decompression"""

import logging
from typing import NamedTuple, Sequence, Union

from text_compression.errors import FormatError, IndexOutOfRange, TypeMismatch

logger = logging.getLogger(__name__)

# every pair is counted as two size units (index + char), no bit packing
PAIR_SIZE_UNITS = 2


class EncodedPair(NamedTuple):
    """One step of LZ78 output: code of the known prefix plus the next char."""

    index: int
    char: str


Pair = Union[EncodedPair, tuple[int, str]]


def encode(text: str) -> list[EncodedPair]:
    """
    Compresses a string using the LZ78 algorithm.
    Returns a list of (index, char) pairs.
    """
    if not isinstance(text, str):
        raise TypeMismatch(
            f"Input text must be a string, got {type(text).__name__}"
        )

    dictionary = {"": 0}
    result = []
    current = ""
    dict_size = 1

    for char in text:
        next_seq = current + char

        if next_seq in dictionary:
            current = next_seq
        else:
            dictionary[next_seq] = dict_size
            dict_size += 1
            result.append(EncodedPair(dictionary[current], char))
            current = ""

    # input ended in the middle of a known phrase
    if current:
        result.append(EncodedPair(dictionary[current], ""))

    logger.debug(
        "LZ78 encoded %d chars into %d pairs (%d dictionary entries)",
        len(text), len(result), dict_size,
    )
    return result


def _check_pairs(pairs) -> None:
    if isinstance(pairs, str) or not isinstance(pairs, (list, tuple)):
        raise TypeMismatch(
            f"Encoded data must be a list of pairs, got {type(pairs).__name__}"
        )


def _unpack_pair(pair, position: int) -> tuple[int, str]:
    try:
        index, char = pair
    except (TypeError, ValueError):
        raise TypeMismatch(f"Pair {position} is not an (index, char) pair: {pair!r}")

    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeMismatch(f"Pair {position} has a non-integer index: {index!r}")
    if not isinstance(char, str):
        raise TypeMismatch(f"Pair {position} has a non-text char: {char!r}")
    if len(char) > 1:
        raise TypeMismatch(f"Pair {position} has more than one char: {char!r}")

    return index, char


def _replay(pairs: Sequence[Pair]):
    """
    Replays the dictionary growth rule shared by the decoder and the
    dictionary rebuilder.
    Yields (code, string) for every pair; code is None when the pair
    registers nothing (empty string).
    """
    _check_pairs(pairs)

    # list indexed by code, code 0 is the empty string
    dictionary = [""]

    for position, pair in enumerate(pairs):
        index, char = _unpack_pair(pair, position)

        if index < 0 or index >= len(dictionary):
            raise IndexOutOfRange(index, len(dictionary), position)

        new_string = dictionary[index] + char

        if new_string:
            dictionary.append(new_string)
            yield len(dictionary) - 1, new_string
        else:
            yield None, new_string


def decode(pairs: Sequence[Pair]) -> str:
    """
    Decompresses a list of (index, char) pairs using the LZ78 algorithm.
    Returns the reconstructed string.
    """
    result = [string for _, string in _replay(pairs)]
    logger.debug("LZ78 decoded %d pairs into %d chars", len(pairs), sum(map(len, result)))
    return "".join(result)


def build_dictionary(pairs: Sequence[Pair], deduplicate: bool = False) -> list[tuple[int, str]]:
    """
    Rebuilds the index -> string table of an encoded pair sequence for display.

    By default every non-empty string gets the next code, exactly like
    encode() and decode() do, so the table indices match the pair indices.
    With deduplicate=True a string that is already present anywhere in the
    table is not registered again; in that mode the displayed indices may
    drift away from the ones referenced by the pairs, and unknown indices
    resolve to the empty string.

    :param pairs: sequence of (index, char) pairs
    :param deduplicate: bool, skip strings already present in the table
    :return: list of (index, string) sorted by index, starting with (0, "")
    """
    if not deduplicate:
        table = [(0, "")]
        table.extend((code, string) for code, string in _replay(pairs) if code is not None)
        return table

    _check_pairs(pairs)
    dictionary = {0: ""}
    seen = {""}
    next_code = 1

    for position, pair in enumerate(pairs):
        index, char = _unpack_pair(pair, position)
        new_string = dictionary.get(index, "") + char

        if new_string not in seen:
            dictionary[next_code] = new_string
            seen.add(new_string)
            next_code += 1

    return sorted(dictionary.items())


def estimate_compressed_size(pairs: Sequence[Pair]) -> int:
    """Size estimate of an encoded sequence: two units per pair."""
    return len(pairs) * PAIR_SIZE_UNITS


def encoded_to_string(pairs: Sequence[Pair]) -> str:
    """
    Serializes pairs into the .lz78 text format, one "index,char" per line.
    """
    _check_pairs(pairs)

    lines = []
    for position, pair in enumerate(pairs):
        index, char = _unpack_pair(pair, position)
        lines.append(f"{index},{char}")

    return "\n".join(lines)


def _parse_index(field: str, line_number: int, line: str) -> int:
    field = field.strip()
    if not field or not (field.isascii() and field.isdigit()):
        raise FormatError(
            f"Invalid index on line {line_number}: {line!r}", line_number, line
        )
    return int(field)


def string_to_encoded(blob: str) -> list[EncodedPair]:
    """
    Parses the .lz78 text format back into (index, char) pairs.

    Only the first comma of a line separates the fields, so a comma
    character survives the round trip: "3,," is (3, ",") rather than a
    line with three fields. A line "k," directly followed by an empty line
    carries the newline character.
    """
    if not isinstance(blob, str):
        raise TypeMismatch(
            f"Encoded blob must be a string, got {type(blob).__name__}"
        )

    blob = blob.strip()
    if not blob:
        return []

    lines = blob.split("\n")
    pairs = []
    position = 0

    while position < len(lines):
        line = lines[position]
        line_number = position + 1
        index_field, comma, char = line.partition(",")

        if not comma:
            raise FormatError(
                f'Wrong format on line {line_number}, expected "index,char": {line!r}',
                line_number, line,
            )

        index = _parse_index(index_field, line_number, line)

        if not char and position + 1 < len(lines) and lines[position + 1] == "":
            char = "\n"
            position += 1
        elif len(char) > 1:
            raise FormatError(
                f"More than one character on line {line_number}: {line!r}",
                line_number, line,
            )

        pairs.append(EncodedPair(index, char))
        position += 1

    return pairs
