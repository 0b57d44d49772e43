"""
ui/helpers.py
=============
Drawing utilities shared across UI modules: alpha-surface drawing,
text rendering, font loading and confidence colouring.
"""

from __future__ import annotations

from typing import Tuple

import pygame

from .types import ColorRGB, ColorRGBA


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_circle(
    target: pygame.Surface,
    color: ColorRGBA,
    centre: Tuple[int, int],
    radius: int,
    width: int = 0,
) -> None:
    """Draw a semi-transparent circle."""
    if radius < 1:
        return
    size = radius * 2 + 2
    tmp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(tmp, color, (radius + 1, radius + 1), radius, width)
    target.blit(tmp, (centre[0] - radius - 1, centre[1] - radius - 1))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect


class ViewHelpers:
    """Mixin with small utilities that need view state."""

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        return pygame.font.SysFont("Arial", size, bold=bold)

    def _confidence_color(self, confidence: int) -> ColorRGB:
        """Green above the dispatch threshold, amber above half, grey otherwise."""
        if confidence > self.session.policy.trigger_threshold:
            return self.GOOD_COLOR
        if confidence > self.MID_CONFIDENCE:
            return self.WARN_COLOR
        return self.MUTED_TEXT_COLOR

    @staticmethod
    def _ipt(pair: Tuple[float, float]) -> Tuple[int, int]:
        return int(round(pair[0])), int(round(pair[1]))
