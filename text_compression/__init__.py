"""
LZ78 dictionary coding and Huffman statistical coding of text.
"""
from text_compression.errors import (
    CompressionError,
    DomainError,
    FormatError,
    IndexOutOfRange,
    TypeMismatch,
)
from text_compression.huffman_coding import HuffmanResult, HuffmanTree, build_huffman
from text_compression.LZ78 import (
    EncodedPair,
    build_dictionary,
    decode,
    encode,
    encoded_to_string,
    string_to_encoded,
)
from text_compression.lz78_compressor import LZ78Compressor

__version__ = "0.1.0"
