"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Byte counts <-> human-readable sizes for the minimum-size option and the run summary.
Units are binary (1K = 1024 bytes); a trailing 'B' is optional.
"""
import re

_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]
_MULTIPLIERS = {"": 1, "K": 1024, "M": 1024 ** 2, "G": 1024 ** 3, "T": 1024 ** 4, "P": 1024 ** 5}

# "2048", "2K", "1.5MB", "3 gb"; no sign, one optional decimal point
_SIZE_PATTERN = re.compile(r"(?P<number>[0-9]+(?:\.[0-9]+)?)\s*(?P<unit>[KMGTP]?)B?\Z")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """Format a byte count with two decimals, e.g. 2048 -> '2.00KB'."""
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in _UNITS:
            if value < 1024:
                return f"{value:.2f}{unit}"
            value /= 1024
        return f"{value:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse a size such as '2048', '2K', '1.5MB' into bytes.
        Raises ValueError for negative or malformed sizes.
        """
        text = size_str.strip().upper()
        if text.startswith("-"):
            raise ValueError(f"Negative size not allowed: '{size_str}'")

        match = _SIZE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. Expected a number with an optional "
                f"unit, e.g. 2048, 2K, 1.5MB"
            )
        return int(float(match.group("number")) * _MULTIPLIERS[match.group("unit")])
