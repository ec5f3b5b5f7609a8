"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import sys

UNBOUNDED = sys.maxsize  # "no upper limit" sentinel for size bounds


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50 KB, 3.20 MB).
        The UNBOUNDED sentinel renders as '∞'.
        """
        if size_bytes >= UNBOUNDED:
            return "∞"
        if size_bytes < 0:
            return "0 B"
        if size_bytes < 1024:
            return f"{size_bytes} B"

        size = float(size_bytes)
        for unit in ["KB", "MB", "GB"]:
            size /= 1024
            if size < 1024:
                return f"{size:.2f} {unit}"
        return f"{size / 1024:.2f} TB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1.5GB', '2048KB', '1000', '1K', '1m', '1T', etc. (case-insensitive).
        '-1' means unbounded and returns UNBOUNDED.
        Raises ValueError for other negative sizes or invalid formats.
        """
        size_str = size_str.strip().upper()

        if size_str == "-1":
            return UNBOUNDED

        # Define units with both full (KB) and short (K) forms
        units = {
            'TB': 1024 ** 4, 'T': 1024 ** 4,
            'GB': 1024 ** 3, 'G': 1024 ** 3,
            'MB': 1024 ** 2, 'M': 1024 ** 2,
            'KB': 1024, 'K': 1024,
            'B': 1,
        }

        # Check for unit suffix (longest first to avoid 'KB' matching as 'K' + 'B')
        for unit in sorted(units.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * units[unit])

        # No unit specified, treat as bytes
        try:
            value = float(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Use a number with an optional unit: B, KB, MB, GB or TB (or -1 for unlimited)"
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return int(value)

    @staticmethod
    def bytes_to_gb(size_bytes: int) -> float:
        return size_bytes / 1_073_741_824.0
