"""
Size and percentage formatting shared by the hardware modules.
"""

from hostfetch.core.config import BinaryPrefix

_UNITS = {
    BinaryPrefix.IEC: (1024, ("B", "KiB", "MiB", "GiB", "TiB", "PiB")),
    BinaryPrefix.SI: (1000, ("B", "kB", "MB", "GB", "TB", "PB")),
    BinaryPrefix.JEDEC: (1024, ("B", "KB", "MB", "GB", "TB", "PB")),
}

BAR_WIDTH = 10


def format_bytes(size: int, prefix: BinaryPrefix = BinaryPrefix.IEC) -> str:
    """Human readable size, e.g. ``1.50 GiB``."""
    base, units = _UNITS[prefix]
    value = float(size)
    for unit in units[:-1]:
        if abs(value) < base:
            break
        value /= base
    else:
        unit = units[-1]
    if unit == units[0]:
        return f"{int(value)} {unit}"
    return f"{value:.2f} {unit}"


def format_percent(percent: float, percent_type: int = 1) -> str:
    """
    Render a percentage according to --percent-type.

    Bit 1 prints the number, bit 2 prints a bar. Anything else falls back to
    the number.
    """
    parts = []
    if percent_type & 2:
        filled = max(0, min(BAR_WIDTH, round(percent / 100 * BAR_WIDTH)))
        parts.append("[" + "■" * filled + "-" * (BAR_WIDTH - filled) + "]")
    if percent_type & 1 or not parts:
        parts.append(f"{percent:.0f}%")
    return " ".join(parts)
