"""
Deterministic vehicle colors.

Each vehicle id maps to one entry of a fixed 16-color palette. The mapping is
stable across sessions; distinct ids may share a color.
"""

from regatta_replay.core.constants import VEHICLE_COLOR_PALETTE


def _utf16_units(value: str):
    data = value.encode('utf-16-le')
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def string_hash(value: str) -> int:
    """32-bit signed rolling hash over UTF-16 code units (h * 31 + unit)."""
    h = 0
    for unit in _utf16_units(value):
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def generate_vehicle_color(vehicle_id: str) -> str:
    """
    Pick the palette color for a vehicle.

    Args:
        vehicle_id: Vehicle identifier

    Returns:
        str: CSS color string from the palette
    """
    index = abs(string_hash(vehicle_id)) % len(VEHICLE_COLOR_PALETTE)
    return VEHICLE_COLOR_PALETTE[index]
