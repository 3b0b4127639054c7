"""
Huffman coding algorithm -
statistical text compression with prefix codes
"""

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from bitarray import bitarray, decodetree
from bitarray.util import ba2int, int2ba

from text_compression.errors import CompressionError, DomainError, TypeMismatch
from text_compression.huffman_metrics import PRECISION, ResultRow, calculate_metrics

logger = logging.getLogger(__name__)


class ProbabilityEntry(NamedTuple):
    """Symbol with its count in the text and its rounded probability"""

    symbol: str
    frequency: int
    probability: float


class Node(ABC):
    """
    Class object for Node in Huffman's Tree
    """

    probability: float

    @property
    @abstractmethod
    def symbols(self) -> list[str]:
        """Symbols held by the subtree, most probable first"""

    def is_leaf(self) -> bool:
        return False


class Leaf(Node):
    """
    Leaf of Huffman's Tree, holds exactly one symbol
    """

    def __init__(self, symbol: str, probability: float):
        """
        :param symbol: str, symbol held by the leaf
        :param probability: float, probability of the symbol in the text
        """
        self.symbol = symbol
        self.probability = probability

    @property
    def symbols(self) -> list[str]:
        return [self.symbol]

    def is_leaf(self) -> bool:
        return True

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.probability})"


class Internal(Node):
    """
    Merged node of Huffman's Tree, owns both of its children
    """

    def __init__(self, left: Node, right: Node):
        """
        :param left: Node, child reached with bit 0
        :param right: Node, child reached with bit 1
        """
        self.left = left
        self.right = right
        self.probability = left.probability + right.probability

        # symbols of the more probable child go first, right child on a tie
        if left.probability > right.probability:
            self._symbols = left.symbols + right.symbols
        else:
            self._symbols = right.symbols + left.symbols

    @property
    def symbols(self) -> list[str]:
        return self._symbols

    def __repr__(self):
        return f"Internal({''.join(self._symbols)!r}, {self.probability})"


def char_frequency(text: str) -> Counter:
    """
    Function builds dictionary with frequency
    of each symbol for given text, in order of first appearance.

    :param text: str, text to count symbol frequency for
    :return: Counter, symbol -> frequency
    """
    if not isinstance(text, str):
        raise TypeMismatch(f"Text must be a string, got {type(text).__name__}")
    return Counter(text)


def probability_table(text: str) -> list[ProbabilityEntry]:
    """
    Function computes the probability of every symbol of the text,
    rounded to 3 decimals, most probable first (ties keep first appearance).

    :param text: str, text to analyse
    :return: list of ProbabilityEntry
    """
    frequencies = char_frequency(text)
    total = len(text)
    if total == 0:
        raise DomainError("Cannot compute symbol probabilities of an empty text")

    entries = [
        ProbabilityEntry(symbol, frequency, round(frequency / total, PRECISION))
        for symbol, frequency in frequencies.items()
    ]
    entries.sort(key=lambda entry: entry.probability, reverse=True)
    return entries


class HuffmanTree:
    """
    Class object for Huffman Tree - main structure used
    in Huffman coding algorithm. Builds the tree from a probability
    table and assigns the prefix codes.
    """

    def __init__(self, entries: Optional[Sequence[ProbabilityEntry]] = None):
        """
        Function initializes the structure of Huffman Tree.

        :param entries: probability entries to build the tree from
        """
        self.res_codes: dict[str, str] = {}
        self.root: Optional[Node] = None
        self.entries = list(entries) if entries else []

    @classmethod
    def build_from_probabilities(cls, entries: Sequence[ProbabilityEntry]) -> "HuffmanTree":
        """
        Builds Huffman's tree from a probability table, generates the
        prefix codes and returns the instance.

        :param entries: probability entries, most probable first
        :return: HuffmanTree with root and res_codes filled
        """
        tree = cls(entries)
        tree.tree()
        tree.codes_generation()
        tree.verify_prefix_free()
        return tree

    @classmethod
    def from_text(cls, text: str) -> "HuffmanTree":
        return cls.build_from_probabilities(probability_table(text))

    def tree(self):
        """
        Function builds Huffman Tree.

        Nodes with equal probability leave the queue in the order they
        entered it: leaves in table order, merged nodes after every node
        already queued.
        """
        if not self.entries:
            raise DomainError("Cannot build a Huffman tree without symbols")

        order = itertools.count()
        nodes = [
            (entry.probability, next(order), Leaf(entry.symbol, entry.probability))
            for entry in self.entries
        ]
        heapq.heapify(nodes)

        while len(nodes) > 1:
            # smallest node goes right, the next one left
            _, _, right = heapq.heappop(nodes)
            _, _, left = heapq.heappop(nodes)

            merged = Internal(left, right)
            heapq.heappush(nodes, (merged.probability, next(order), merged))

        self.root = nodes[0][2]
        logger.debug("Built Huffman tree over %d symbols", len(self.entries))

    def codes_generation(self, node: Optional[Node] = None, curr_code: str = ""):
        """
        Recursive function that generates
        code for each symbol, preorder traversal of Huffman's tree

        :param node: node to start traversal from
        :param curr_code: str, current code of a symbol
        """

        # if node is not passed, we start traversal from the root
        if node is None:
            if self.root is None:
                raise DomainError("Huffman tree is not built yet")
            node = self.root
            self.res_codes = {}

        # a lone leaf still needs a one bit code
        if node.is_leaf():
            self.res_codes.setdefault(node.symbol, curr_code or "0")
            return

        self.codes_generation(node.left, curr_code + "0")
        self.codes_generation(node.right, curr_code + "1")

    def verify_prefix_free(self):
        """
        Checks that no code is a prefix of another one.
        """
        try:
            decodetree({symbol: bitarray(code) for symbol, code in self.res_codes.items()})
        except ValueError as error:
            raise CompressionError(f"Huffman codes are not prefix-free: {error}") from error

    def sorted_codes(self) -> dict[str, str]:
        """
        Returns the code table ordered by code length, then by the binary
        value of the code. The codes themselves are unchanged.
        """
        return dict(
            sorted(
                self.res_codes.items(),
                key=lambda item: (len(item[1]), ba2int(bitarray(item[1]))),
            )
        )

    def make_canonical(self) -> dict[str, str]:
        """
        Recomputes the codes as canonical Huffman codes: same lengths,
        consecutive binary values assigned by length then symbol.

        :return: dict, symbol -> canonical code
        """
        if not self.res_codes:
            raise DomainError("No codes to make canonical")

        lengths = sorted(
            ((symbol, len(code)) for symbol, code in self.res_codes.items()),
            key=lambda item: (item[1], item[0]),
        )

        canon_codes = {}
        code = 0
        prev_len = lengths[0][1]

        for symbol, length in lengths:
            # shift left when the length grows
            code <<= length - prev_len
            canon_codes[symbol] = int2ba(code, length).to01()
            code += 1
            prev_len = length

        self.canon_codes = canon_codes
        return canon_codes


@dataclass
class HuffmanResult:
    """Everything the Huffman pipeline computes for one text"""

    rows: list[ResultRow]
    average_length: float
    entropy: float
    efficiency: float
    tree: HuffmanTree
    codes: dict[str, str]

    def to_dict(self) -> dict:
        return {
            "rows": [row._asdict() for row in self.rows],
            "average_length": self.average_length,
            "entropy": self.entropy,
            "efficiency": self.efficiency,
            "codes": self.codes,
        }


def build_huffman(text: str) -> HuffmanResult:
    """
    Function runs the whole Huffman pipeline on a text:
    probabilities -> tree -> codes -> metrics.

    :param text: str, text to analyse
    :return: HuffmanResult
    """
    entries = probability_table(text)
    tree = HuffmanTree.build_from_probabilities(entries)
    codes = tree.sorted_codes()
    rows, average_length, entropy, efficiency = calculate_metrics(entries, codes)

    return HuffmanResult(rows, average_length, entropy, efficiency, tree, codes)
