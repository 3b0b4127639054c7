"""
Size statistics of an LZ78 compression or decompression run.
"""
from text_compression.errors import DomainError

RATIO_PRECISION = 2


def calculate(original_size: int, compressed_size: int) -> dict:
    """
    Function calculates basic compression statistics.

    :param original_size: int, size of the input text in bytes
    :param compressed_size: int, estimated size of the encoded pairs
    :return: dict with sizes, saved space and ratios in percent
    """
    if original_size <= 0 or compressed_size < 0:
        raise DomainError(
            f"Sizes must be positive (original={original_size}, "
            f"compressed={compressed_size})"
        )

    space_saved = original_size - compressed_size
    compression_ratio = space_saved / original_size * 100
    compression_efficiency = compressed_size / original_size * 100

    return {
        "original_size": original_size,
        "compressed_size": compressed_size,
        "space_saved": space_saved,
        "compression_ratio": round(compression_ratio, RATIO_PRECISION),
        "compression_efficiency": round(compression_efficiency, RATIO_PRECISION),
        "is_compressed": space_saved > 0,
    }


def expansion(compressed_size: int, decompressed_size: int) -> dict:
    """
    Function calculates how much the data grew back when decompressed.
    The ratio is negative when the decompressed text is smaller.
    """
    if compressed_size <= 0 or decompressed_size < 0:
        raise DomainError(
            f"Sizes must be positive (compressed={compressed_size}, "
            f"decompressed={decompressed_size})"
        )

    expansion_ratio = (decompressed_size - compressed_size) / compressed_size * 100

    return {
        "compressed_size": compressed_size,
        "decompressed_size": decompressed_size,
        "expansion_ratio": round(expansion_ratio, RATIO_PRECISION),
    }
