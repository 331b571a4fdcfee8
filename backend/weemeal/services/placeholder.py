# weemeal/services/placeholder.py
# Inline SVG placeholder for recipes without a photo.
# Colours depend only on len(name), so a recipe keeps the same placeholder.

from __future__ import annotations

from typing import Dict, List
from urllib.parse import quote
from xml.sax.saxutils import escape

from weemeal.models.image import ImageResult

PALETTE: List[Dict[str, str]] = [
    {"bg": "#FEF3C7", "accent": "#F59E0B"},  # amber
    {"bg": "#DCFCE7", "accent": "#22C55E"},  # green
    {"bg": "#FEE2E2", "accent": "#EF4444"},  # red
    {"bg": "#E0E7FF", "accent": "#6366F1"},  # indigo
    {"bg": "#FCE7F3", "accent": "#EC4899"},  # pink
]

MAX_LABEL = 25
FOOD_ICON = "\U0001F37D\uFE0F"  # fork and knife with plate

# unreserved URI marks stay literal
_URI_SAFE = "-_.!~*'()"


def placeholder_colors(recipe_name: str) -> Dict[str, str]:
    return PALETTE[len(recipe_name) % len(PALETTE)]


def render_placeholder_svg(recipe_name: str) -> str:
    colors = placeholder_colors(recipe_name)
    bg, accent = colors["bg"], colors["accent"]
    label = escape(recipe_name[:MAX_LABEL])
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="800" height="600" viewBox="0 0 800 600">'
        f'<rect width="800" height="600" fill="{bg}"/>'
        f'<circle cx="400" cy="250" r="100" fill="{accent}" opacity="0.2"/>'
        f'<circle cx="400" cy="250" r="70" fill="{accent}" opacity="0.3"/>'
        f'<text x="400" y="265" text-anchor="middle" font-family="Arial, sans-serif" '
        f'font-size="50" fill="{accent}">{FOOD_ICON}</text>'
        '<text x="400" y="400" text-anchor="middle" font-family="Arial, sans-serif" '
        f'font-size="28" fill="#374151" font-weight="600">{label}</text>'
        "</svg>"
    )


def generate_placeholder_image(recipe_name: str) -> ImageResult:
    svg = render_placeholder_svg(recipe_name)
    return ImageResult(
        url="data:image/svg+xml," + quote(svg, safe=_URI_SAFE),
        source="placeholder",
    )
