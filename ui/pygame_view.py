#!/usr/bin/env python3
"""
Main view class — combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, VenueTransform, heading_tip
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin + alpha / text drawing
    ├── draw_map.py        – MapRenderer mixin (floor, zones, beacons, gates, user)
    ├── hud.py             – HudRenderer mixin (side panels, log, breakdown, help)
    └── pygame_view.py     – ValetView (this file – main loop)

The view never computes scores itself; it issues session commands and
draws whatever :meth:`ValetSession.snapshot` returns.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pygame

from valet.session import ValetSession

from .constants import ViewConstants
from .draw_map import MapRenderer
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import VenueTransform

log = logging.getLogger("ui")


class ValetView(
    ViewConstants,
    ViewHelpers,
    MapRenderer,
    HudRenderer,
):
    """Venue map and dashboards for one :class:`ValetSession`."""

    def __init__(self, session: ValetSession, width: int = 1280, height: int = 720, fps: int = 60):
        self.session = session
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_title: Optional[pygame.font.Font] = None
        self.font_label: Optional[pygame.font.Font] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_mono: Optional[pygame.font.Font] = None

        self.show_panels = True
        self.show_breakdown = False
        self._screenshot_flash_until = 0.0
        self.time_seconds = 0.0
        self.transform = self._layout()

    # ------------------------------------------------------------------ #
    #  Layout                                                              #
    # ------------------------------------------------------------------ #
    def _map_rect(self) -> pygame.Rect:
        pad = self.PANEL_PAD
        left = self.LEFT_PANEL_W if self.show_panels else 0
        right = self.width - (self.RIGHT_PANEL_W if self.show_panels else 0)
        return pygame.Rect(
            left + pad, pad, right - left - 2 * pad, self.height - self.LOG_PANEL_H - 3 * pad
        )

    def _log_rect(self) -> pygame.Rect:
        area = self._map_rect()
        return pygame.Rect(area.x, area.bottom + self.PANEL_PAD, area.w, self.LOG_PANEL_H)

    def _layout(self) -> VenueTransform:
        area = self._map_rect()
        policy = self.session.policy
        return VenueTransform(
            area.x, area.y, area.w, area.h, policy.venue_width, policy.venue_height
        )

    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(900, new_w)
        self.height = max(600, new_h)
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        self.transform = self._layout()

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"valet_{stamp}.png")
        pygame.image.save(self.screen, path)
        log.info("screenshot saved to %s", path)
        self._screenshot_flash_until = self.time_seconds + 0.35

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _toggle_running(self) -> None:
        if self.session.running:
            self.session.stop()
        else:
            self.session.start()

    def _place_at(self, sx: int, sy: int) -> None:
        if not self.transform.contains(sx, sy):
            return
        vx, vy = self.transform.to_venue(sx, sy)
        policy = self.session.policy
        vx = max(policy.min_x, min(policy.max_x, vx))
        vy = max(policy.min_y, min(policy.max_y, vy))
        current = self.session.snapshot().pedestrian
        self.session.place_pedestrian(
            replace(current, x=vx, y=vy, approach_zone=None, dwell_s=0.0)
        )

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("INTELLIGENT VALET")
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font_title = self._load_font(22, bold=True)
        self.font_label = self._load_font(16, bold=True)
        self.font_small = self._load_font(13)
        self.font_tiny = self._load_font(11)
        self.font_mono = pygame.font.SysFont("Courier New", 12)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._place_at(*event.pos)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        self._toggle_running()
                    elif event.key == pygame.K_r:
                        self.session.reset()
                    elif event.key == pygame.K_d:
                        self.session.perturb_direction()
                    elif event.key == pygame.K_F3:
                        self.show_breakdown = not self.show_breakdown
                    elif event.key == pygame.K_l:
                        self.show_panels = not self.show_panels
                        self.transform = self._layout()
                    elif event.key == pygame.K_F12:
                        self._take_screenshot()

            # ---- render ------------------------------------------------- #
            snap = self.session.snapshot()
            self.screen.fill(self.BG_COLOR)

            self.draw_floor(self.screen)
            self.draw_approach_zones(self.screen, snap)
            self.draw_beacons(self.screen, snap)
            self.draw_gates(self.screen, snap)
            self.draw_pedestrian(self.screen, snap)

            map_rect = self._map_rect()
            if self.show_breakdown:
                self.draw_breakdown(self.screen, snap, map_rect.x + 8, map_rect.y + 8)
            self.draw_log_panel(self.screen, snap, self._log_rect())

            if self.show_panels:
                self.draw_left_panel(self.screen, snap)
                self.draw_right_panel(self.screen, snap)
            else:
                self.draw_help(self.screen, map_rect.x + 8, map_rect.bottom - 8)

            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        self.session.stop()
        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    session: ValetSession, width: int = 1280, height: int = 720, fps: int = 60
) -> None:
    view = ValetView(session=session, width=width, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a session. Run `python main.py` "
        "or call run_pygame_view(your_session)."
    )
