"""Probability -> radius and probability -> color scales.

Radius uses a square-root scale so bubble *area* tracks probability.
Color uses an independent power scale, so both grow monotonically with
probability without being linearly tied to each other.
"""

from __future__ import annotations

import math


def radius_for(probability: float, min_radius: float, max_radius: float) -> float:
    """Map probability in [0, 1] onto [min_radius, max_radius] by square root.

    Probabilities outside [0, 1] are clamped first.
    """
    p = min(1.0, max(0.0, probability))
    return min_radius + (max_radius - min_radius) * math.sqrt(p)


def color_value_for(probability: float, exponent: float = 0.4) -> float:
    """Map probability in [0, 1] onto a color intensity in [0, 1]."""
    p = min(1.0, max(0.0, probability))
    return p**exponent


def parse_hex_color(color: str) -> tuple[int, int, int]:
    """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` into an RGB triple.

    The alpha channel, if present, is ignored.

    Raises:
        ValueError: If *color* is not a hex color.
    """
    digits = color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        raise ValueError(f"Not a hex color: {color!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def interpolate_rgb(start: str, end: str, t: float) -> str:
    """Linearly interpolate two hex colors in RGB space.

    Args:
        start: Color at ``t = 0``.
        end: Color at ``t = 1``.
        t: Position in [0, 1]; clamped.

    Returns:
        The interpolated color as ``#rrggbb``.
    """
    t = min(1.0, max(0.0, t))
    a = parse_hex_color(start)
    b = parse_hex_color(end)
    channels = (round(ca + (cb - ca) * t) for ca, cb in zip(a, b))
    return "#" + "".join(f"{c:02x}" for c in channels)
