"""Color utilities for creatures.

Creatures carry a ``#rrggbb`` hex color that is only consumed by renderers.
Colors are drawn from the shared simulation RNG so seeded runs stay
reproducible.

Design Note:
    These are pure functions with no simulation dependencies.
"""

import random
from typing import Optional, Tuple

# Default saturation for freshly generated creature colors
CREATURE_COLOR_SATURATION = 0.6

# Largest per-channel shift applied when a mutated creature's color drifts
COLOR_DRIFT = 20


def hue_to_rgb(hue: float, saturation: float = 0.3) -> Tuple[int, int, int]:
    """Convert a hue value (0.0-1.0) to an RGB color tuple.

    Uses a simplified HSL-to-RGB conversion with configurable saturation,
    blending toward white as saturation drops.

    Args:
        hue: Hue value from 0.0 to 1.0 (wraps around like a color wheel)
        saturation: Color saturation from 0.0 (white) to 1.0 (vivid)

    Returns:
        Tuple of (R, G, B) values, each 0-255
    """
    hue_degrees = (hue % 1.0) * 360

    # 6-sector color wheel
    if hue_degrees < 60:
        r, g, b = 255, int(hue_degrees / 60 * 255), 0
    elif hue_degrees < 120:
        r, g, b = int((120 - hue_degrees) / 60 * 255), 255, 0
    elif hue_degrees < 180:
        r, g, b = 0, 255, int((hue_degrees - 120) / 60 * 255)
    elif hue_degrees < 240:
        r, g, b = 0, int((240 - hue_degrees) / 60 * 255), 255
    elif hue_degrees < 300:
        r, g, b = int((hue_degrees - 240) / 60 * 255), 0, 255
    else:
        r, g, b = 255, 0, int((360 - hue_degrees) / 60 * 255)

    r = int(r * saturation + 255 * (1 - saturation))
    g = int(g * saturation + 255 * (1 - saturation))
    b = int(b * saturation + 255 * (1 - saturation))

    return (r, g, b)


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse ``#rrggbb`` (leading ``#`` optional) into an RGB tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def random_color(rng: Optional[random.Random] = None) -> str:
    """Pick a random creature color as a hex string."""
    rng = rng or random
    return rgb_to_hex(hue_to_rgb(rng.random(), saturation=CREATURE_COLOR_SATURATION))


def color_small_change(
    color: str, rng: Optional[random.Random] = None, amount: int = COLOR_DRIFT
) -> str:
    """Nudge every channel of ``color`` by up to ``amount`` in either direction."""
    rng = rng or random
    channels = [
        max(0, min(255, channel + rng.randint(-amount, amount)))
        for channel in hex_to_rgb(color)
    ]
    return rgb_to_hex((channels[0], channels[1], channels[2]))
