"""
Temperature conversion helpers.
"""

import math


def round_half_up(value: float, precision: int = 1) -> float:
    """
    Round a value half-up to the given number of decimal places.

    Args:
        value: Value to round
        precision: Number of decimal places

    Returns:
        Rounded value (floor(value * 10^precision + 0.5) / 10^precision)
    """
    ratio = 10**precision
    return math.floor(value * ratio + 0.5) / ratio


def celsius_to_fahrenheit(celsius: float) -> float:
    """Convert Celsius to Fahrenheit (F = C * 1.8 + 32), rounded to 1 decimal."""
    return round_half_up(celsius * 1.8 + 32)


def celsius_to_kelvin(celsius: float) -> float:
    """Convert Celsius to Kelvin (K = C + 273), rounded to 1 decimal."""
    # 273, not 273.15: clients depend on this offset
    return round_half_up(celsius + 273)
