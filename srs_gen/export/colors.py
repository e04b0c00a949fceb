"""Color normalisation before rasterization.

Modern stylesheets resolve colors in wide-gamut spaces (``oklch()``,
``oklab()``, ``lab()`` ...) that raster capture cannot sample; left alone they
abort the capture or paint blank regions.  The sanitizer walks the visual
tree and rewrites every such value on the three color channels into plain
``rgb()``/``rgba()``.

``oklch()`` and ``oklab()`` are converted exactly (then clipped to the sRGB
gamut).  Any other unsupported function, or a value that cannot be parsed,
is replaced with the fallback color.  Output values are always supported, so
a second pass changes nothing.
"""

from __future__ import annotations

import math
import re

from srs_gen.render.visual import VisualNode

COLOR_CHANNELS: tuple[str, ...] = ("color", "background-color", "border-color")

DEFAULT_FALLBACK = "rgb(0, 0, 0)"

# Longest names first so "color-mix" wins over "color".
_UNSUPPORTED_RE = re.compile(r"(?<![\w-])(oklch|oklab|color-mix|color|lab|lch|hwb)\(", re.IGNORECASE)

# Percent reference ranges from CSS Color 4.
_OK_CHROMA_PERCENT = 0.4
_OK_AB_PERCENT = 0.4

_ANGLE_UNITS = {"deg": 1.0, "grad": 0.9, "rad": 180.0 / math.pi, "turn": 360.0}


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _find_calls(value: str) -> list[tuple[int, int, str, str]]:
    """Locate unsupported color function calls in *value*.

    Returns ``(start, end, name, arguments)`` tuples with *end* exclusive.
    Nested parentheses (``color-mix(in srgb, oklch(...) 40%, white)``) are
    balanced.  An unterminated call runs to the end of the string.
    """
    calls: list[tuple[int, int, str, str]] = []
    pos = 0
    while True:
        match = _UNSUPPORTED_RE.search(value, pos)
        if match is None:
            return calls
        depth = 1
        index = match.end()
        while index < len(value) and depth:
            if value[index] == "(":
                depth += 1
            elif value[index] == ")":
                depth -= 1
            index += 1
        args_end = index - 1 if depth == 0 else index
        calls.append((match.start(), index, match.group(1).lower(), value[match.end():args_end]))
        pos = index


def _number(token: str, percent_scale: float = 0.01) -> float:
    """Parse a CSS number or percentage; ``none`` is zero."""
    token = token.strip().lower()
    if token == "none":
        return 0.0
    if token.endswith("%"):
        return float(token[:-1]) * percent_scale
    return float(token)


def _angle(token: str) -> float:
    token = token.strip().lower()
    if token == "none":
        return 0.0
    for unit, factor in _ANGLE_UNITS.items():
        if token.endswith(unit):
            return float(token[: -len(unit)]) * factor
    return float(token)


def _split_components(args: str) -> tuple[list[str], float]:
    """Split ``"L C H / A"`` into channel tokens and a 0..1 alpha."""
    body, slash, alpha_token = args.partition("/")
    tokens = body.replace(",", " ").split()
    alpha = 1.0
    if slash:
        alpha = min(max(_number(alpha_token), 0.0), 1.0)
    return tokens, alpha


# ---------------------------------------------------------------------------
# Color math
# ---------------------------------------------------------------------------


def _oklab_to_srgb(lightness: float, a: float, b: float) -> tuple[int, int, int]:
    l_ = lightness + 0.3963377774 * a + 0.2158037573 * b
    m_ = lightness - 0.1055613458 * a - 0.0638541728 * b
    s_ = lightness - 0.0894841775 * a - 1.2914855480 * b

    l, m, s = l_ ** 3, m_ ** 3, s_ ** 3

    linear = (
        +4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s,
        -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s,
        -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s,
    )
    return tuple(_encode_channel(channel) for channel in linear)  # type: ignore[return-value]


def _encode_channel(linear: float) -> int:
    """Linear-light sRGB -> gamma-encoded 0..255, clipped to gamut."""
    linear = min(max(linear, 0.0), 1.0)
    if linear <= 0.0031308:
        encoded = 12.92 * linear
    else:
        encoded = 1.055 * linear ** (1 / 2.4) - 0.055
    return int(round(min(max(encoded, 0.0), 1.0) * 255))


def _format_rgb(rgb: tuple[int, int, int], alpha: float) -> str:
    r, g, b = rgb
    if alpha >= 1.0:
        return f"rgb({r}, {g}, {b})"
    alpha_text = f"{alpha:.3f}".rstrip("0").rstrip(".")
    return f"rgba({r}, {g}, {b}, {alpha_text})"


def _convert_call(name: str, args: str) -> str | None:
    """Return an ``rgb()`` equivalent for *name(args)*, or ``None``."""
    try:
        tokens, alpha = _split_components(args)
        if len(tokens) != 3:
            return None
        if name == "oklch":
            lightness = _number(tokens[0])
            chroma = max(_number(tokens[1], _OK_CHROMA_PERCENT / 100), 0.0)
            hue = math.radians(_angle(tokens[2]))
            a, b = chroma * math.cos(hue), chroma * math.sin(hue)
        elif name == "oklab":
            lightness = _number(tokens[0])
            a = _number(tokens[1], _OK_AB_PERCENT / 100)
            b = _number(tokens[2], _OK_AB_PERCENT / 100)
        else:
            return None
        if not all(math.isfinite(v) for v in (lightness, a, b, alpha)):
            return None
        return _format_rgb(_oklab_to_srgb(lightness, a, b), alpha)
    except (ValueError, OverflowError):
        return None


# ---------------------------------------------------------------------------
# ColorSanitizer
# ---------------------------------------------------------------------------


class ColorSanitizer:
    """Rewrites unsupported color functions on every node of a visual tree."""

    def __init__(
        self,
        fallback: str = DEFAULT_FALLBACK,
        channels: tuple[str, ...] = COLOR_CHANNELS,
    ) -> None:
        if not is_supported(fallback):
            raise ValueError(f"Fallback color must itself be supported: {fallback!r}")
        self.fallback = fallback
        self.channels = channels

    def sanitize_value(self, value: str) -> str:
        """Return *value* with every unsupported color call replaced."""
        calls = _find_calls(value)
        if not calls:
            return value

        parts: list[str] = []
        cursor = 0
        for start, end, name, args in calls:
            parts.append(value[cursor:start])
            parts.append(_convert_call(name, args) or self.fallback)
            cursor = end
        parts.append(value[cursor:])
        return "".join(parts)

    def sanitize(self, tree: VisualNode) -> VisualNode:
        """Return a sanitized copy of *tree*; the input is left untouched."""
        result = tree.copy()
        for node in result.walk():
            for channel in self.channels:
                value = node.style.get(channel)
                if value is not None:
                    node.style[channel] = self.sanitize_value(value)
        return result

    __call__ = sanitize


def is_supported(value: str) -> bool:
    """``True`` when *value* contains no color function the rasterizer rejects."""
    return _UNSUPPORTED_RE.search(value) is None


def sanitize(tree: VisualNode, fallback: str = DEFAULT_FALLBACK) -> VisualNode:
    """Module-level shortcut for ``ColorSanitizer(fallback).sanitize(tree)``."""
    return ColorSanitizer(fallback).sanitize(tree)
