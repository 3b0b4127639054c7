"""
Average code length, entropy and efficiency of a Huffman code table.
"""
import logging
from typing import NamedTuple, Sequence

import numpy as np

from text_compression.errors import DomainError

logger = logging.getLogger(__name__)

PRECISION = 3
EFFICIENCY_PRECISION = 2


class ResultRow(NamedTuple):
    """One row of the result matrix"""

    symbol: str
    probability: float
    code: str
    average_length: float
    entropy: float


def average_length_contributions(probabilities: Sequence[float], code_lengths: Sequence[int]) -> np.ndarray:
    """
    Function computes p * len(code) for every symbol.

    :param probabilities: probability of each symbol
    :param code_lengths: length of the code of each symbol, same order
    :return: np.ndarray of contributions to the average code length
    """
    return np.asarray(probabilities, dtype=float) * np.asarray(code_lengths, dtype=float)


def entropy_contributions(probabilities: Sequence[float]) -> np.ndarray:
    """
    Function computes p * log2(1/p) for every symbol, 0 where p is 0.

    :param probabilities: probability of each symbol
    :return: np.ndarray of contributions to the entropy
    """
    probabilities = np.asarray(probabilities, dtype=float)
    result = np.zeros_like(probabilities)
    positive = probabilities > 0
    result[positive] = probabilities[positive] * np.log2(1 / probabilities[positive])
    return result


def calculate_metrics(entries, codes: dict) -> tuple[list[ResultRow], float, float, float]:
    """
    Function builds the result matrix of a Huffman code.

    Per-symbol values and both totals are rounded to 3 decimals, the totals
    being sums of the rounded rows; efficiency = H / L * 100 is rounded to 2.

    :param entries: probability entries (symbol, frequency, probability)
    :param codes: dict, symbol -> code
    :return: tuple (rows, average length L, entropy H, efficiency)
    """
    if not entries:
        raise DomainError("Metrics of an empty alphabet are undefined")

    missing = [entry.symbol for entry in entries if entry.symbol not in codes]
    if missing:
        raise DomainError(f"No code assigned to symbols {missing!r}")

    probabilities = [entry.probability for entry in entries]
    code_lengths = [len(codes[entry.symbol]) for entry in entries]

    average_lengths = [
        round(float(value), PRECISION)
        for value in average_length_contributions(probabilities, code_lengths)
    ]
    entropies = [
        round(float(value), PRECISION)
        for value in entropy_contributions(probabilities)
    ]

    rows = [
        ResultRow(entry.symbol, entry.probability, codes[entry.symbol], length, entropy)
        for entry, length, entropy in zip(entries, average_lengths, entropies)
    ]

    average_length = round(sum(average_lengths), PRECISION)
    entropy = round(sum(entropies), PRECISION)

    if average_length == 0:
        raise DomainError("Average code length is 0, efficiency is undefined")

    efficiency = round(entropy / average_length * 100, EFFICIENCY_PRECISION)

    # Shannon bound H <= L
    if efficiency > 100:
        logger.warning(
            "Entropy %.3f exceeds average code length %.3f (efficiency %.2f%%)",
            entropy, average_length, efficiency,
        )

    logger.debug("L=%.3f H=%.3f efficiency=%.2f%%", average_length, entropy, efficiency)
    return rows, average_length, entropy, efficiency
