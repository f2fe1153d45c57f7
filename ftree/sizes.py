"""Human-readable byte sizes for the header's file-info line."""

from __future__ import annotations

SIZE_UNITS: tuple[str, ...] = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def format_size(size: float, base: float = 1024.0) -> str:
    """Format ``size`` bytes with binary units.

    Bytes and the first unit tier are shown without decimals; from the second
    division onward two decimals are kept. The last unit absorbs overflow.
    """
    value = float(size)
    unit_index = 0
    while value >= base and unit_index < len(SIZE_UNITS) - 1:
        value /= base
        unit_index += 1
    if unit_index > 1:
        return f"{value:.2f} {SIZE_UNITS[unit_index]}"
    return f"{value:.0f} {SIZE_UNITS[unit_index]}"
