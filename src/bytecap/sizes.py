"""Byte count helpers for bytecap."""

import math

SIZE_UNITS = ("B", "KB", "MB", "GB")
MEGABYTE = 1024 * 1024


def format_size(size_bytes: int) -> str:
    """
    Format bytes to a human-readable string (binary units).

    The value is rounded to two decimals and trailing zeros are dropped,
    so 1536 bytes is "1.5 KB" and 11 MiB is "11 MB".

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string
    """
    if size_bytes <= 0:
        return "0 B"

    index = min(int(math.log(size_bytes, 1024)), len(SIZE_UNITS) - 1)
    # log() can land a hair below an exact power of 1024
    if index + 1 < len(SIZE_UNITS) and size_bytes >= 1024 ** (index + 1):
        index += 1

    value = f"{size_bytes / 1024**index:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[index]}"


def megabytes_to_bytes(megabytes: float) -> int:
    """Convert a megabyte setting to an exact byte count."""
    return int(megabytes * MEGABYTE)
