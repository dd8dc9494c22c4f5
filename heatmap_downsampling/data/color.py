"""Int-encoded colors (0xAARRGGBB) and their premultiplied-alpha form.

The "ARaGaBa" form (`alpha*255`, `red*alpha`, `green*alpha`, `blue*alpha`)
is what `Image` stores: averaging colors in this form is a plain weighted sum.
"""
import numpy as np
from matplotlib import colors as mcolors

ALPHA_SCALE = 255
INV_ALPHA_SCALE = 1.0 / ALPHA_SCALE

# Use `| OPAQUE` to add full opacity to pure RGB
OPAQUE = ALPHA_SCALE << 24
RGB_MASK = (1 << 24) - 1

TRANSPARENT = 0


def from_rgba(r, g, b, opacity):
    """Color from R, G, B (0-255) and opacity (0-1)."""
    a255 = int(round(ALPHA_SCALE * opacity))
    return (a255 & 255) << 24 | (int(r) & 255) << 16 | (int(g) & 255) << 8 | (int(b) & 255)


def from_rgb(r, g, b):
    """Color from R, G, B (0-255), fully opaque."""
    return OPAQUE | (int(r) & 255) << 16 | (int(g) & 255) << 8 | (int(b) & 255)


def from_string(text):
    """Color from a CSS-like string.

    Accepts #RGB, #RGBA, #RRGGBB, #RRGGBBAA and any color name matplotlib
    knows. Unparsable strings give transparent black.
    """
    if text.startswith('#') and len(text) in (4, 5, 7, 9):
        try:
            digits = [int(c, 16) for c in text[1:]]
        except ValueError:
            return TRANSPARENT
        if len(digits) in (3, 4):
            r, g, b = (17 * d for d in digits[:3])
            a255 = 17 * digits[3] if len(digits) == 4 else ALPHA_SCALE
        else:
            r = digits[0] << 4 | digits[1]
            g = digits[2] << 4 | digits[3]
            b = digits[4] << 4 | digits[5]
            a255 = digits[6] << 4 | digits[7] if len(digits) == 8 else ALPHA_SCALE
        return a255 << 24 | r << 16 | g << 8 | b
    try:
        r, g, b, a = mcolors.to_rgba(text)
    except ValueError:
        return TRANSPARENT
    return from_rgba(round(255 * r), round(255 * g), round(255 * b), a)


def to_string(color):
    """Hex string, #RRGGBB if fully opaque, #RRGGBBAA otherwise."""
    a255 = color >> 24 & 255
    if a255 == ALPHA_SCALE:
        return f'#{color & RGB_MASK:06x}'
    return f'#{color & RGB_MASK:06x}{a255:02x}'


def to_rgba(color):
    """Return (r, g, b, opacity) with r, g, b in 0-255 and opacity in 0-1."""
    a = INV_ALPHA_SCALE * (color >> 24 & 255)
    return (color >> 16 & 255, color >> 8 & 255, color & 255, a)


def to_aragaba(color):
    """Return the premultiplied quadruplet (a*255, r*a, g*a, b*a) as floats."""
    a255 = color >> 24 & 255
    a = INV_ALPHA_SCALE * a255
    return (float(a255), (color >> 16 & 255) * a, (color >> 8 & 255) * a, (color & 255) * a)


def from_aragaba(a255, ra, ga, ba):
    """Inverse of `to_aragaba` (color channels rounded to nearest)."""
    a255 = int(a255)
    inv_a = ALPHA_SCALE / a255 if a255 > 0 else 0.0
    r, g, b = (int(np.clip(np.rint(inv_a * v), 0, 255)) for v in (ra, ga, ba))
    return a255 << 24 | r << 16 | g << 8 | b


def mix(color0, color1, q):
    """Linear interpolation between two colors, channel by channel (q in 0-1)."""
    channels = []
    for shift in (24, 16, 8, 0):
        c0 = color0 >> shift & 255
        c1 = color1 >> shift & 255
        channels.append(int((1 - q) * c0 + q * c1))
    a, r, g, b = channels
    return a << 24 | r << 16 | g << 8 | b


def scale_alpha(color, scale):
    """Multiply the opacity of `color` by `scale` (truncated to an integer alpha)."""
    new_a = int(scale * (color >> 24 & 255))
    return (new_a & 255) << 24 | (color & RGB_MASK)
