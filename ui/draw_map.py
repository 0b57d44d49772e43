#!/usr/bin/env python3
"""Venue map: floor, walls, approach zones, beacons, gates and the pedestrian (mixin)."""

from __future__ import annotations

import pygame

from valet.session import SessionSnapshot

from .helpers import draw_alpha_circle, render_text
from .types import heading_tip


class MapRenderer:
    """Mixin that draws everything inside the map rectangle."""

    # ------------------------------------------------------------------ #
    #  Floor & walls                                                       #
    # ------------------------------------------------------------------ #

    def draw_floor(self, surface: pygame.Surface) -> None:
        t = self.transform
        policy = self.session.policy
        x0, y0 = t.to_screen(0.0, 0.0)
        x1, y1 = t.to_screen(policy.venue_width, policy.venue_height)
        pygame.draw.rect(
            surface, self.MAP_COLOR, pygame.Rect(x0, y0, x1 - x0, y1 - y0), border_radius=8
        )
        wx0, wy0 = t.to_screen(policy.min_x, policy.min_y)
        wx1, wy1 = t.to_screen(policy.max_x, policy.max_y)
        pygame.draw.rect(
            surface, self.WALL_COLOR, pygame.Rect(wx0, wy0, wx1 - wx0, wy1 - wy0), width=1
        )

    # ------------------------------------------------------------------ #
    #  Approach zones & beacons                                            #
    # ------------------------------------------------------------------ #

    def draw_approach_zones(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        radius = int(self.transform.length(self.session.policy.approach_radius))
        for gate in snap.gates:
            centre = self._ipt(self.transform.to_screen(gate.x, gate.y))
            draw_alpha_circle(surface, (*gate.color, self.ZONE_FILL_ALPHA), centre, radius)
            draw_alpha_circle(surface, (*gate.color, 160), centre, radius, width=1)

    def draw_beacons(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        for beacon in snap.beacons:
            centre = self._ipt(self.transform.to_screen(beacon.x, beacon.y))
            pygame.draw.circle(surface, self.BEACON_COLOR, centre, self.BEACON_RADIUS_PX)
            if beacon.strength > 0:
                ring = int(self.transform.length(beacon.strength * self.BEACON_RING_SCALE))
                alpha = int(self.BEACON_RING_ALPHA_MAX * beacon.strength / 100.0)
                draw_alpha_circle(surface, (*self.BEACON_COLOR, alpha // 3), centre, ring)
                draw_alpha_circle(surface, (*self.BEACON_COLOR, alpha), centre, ring, width=1)
            render_text(
                surface, self.font_tiny, beacon.id,
                (centre[0], centre[1] - 8), self.MUTED_TEXT_COLOR, anchor="midbottom",
            )

    # ------------------------------------------------------------------ #
    #  Gates                                                               #
    # ------------------------------------------------------------------ #

    def draw_gates(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        for gate in snap.gates:
            cx, cy = self._ipt(self.transform.to_screen(gate.x, gate.y))
            pill = pygame.Rect(0, 0, 30, 16)
            pill.center = (cx, cy)
            pygame.draw.rect(surface, gate.color, pill, border_radius=8)
            if snap.dispatch.active and snap.dispatch.gate_id == gate.id:
                pygame.draw.rect(surface, self.GOOD_COLOR, pill.inflate(6, 6), width=2, border_radius=10)
            render_text(surface, self.font_small, f"Gate {gate.id}", (cx, cy + 14),
                        self.TEXT_COLOR, anchor="midtop")
            render_text(surface, self.font_tiny, f"{gate.confidence}%", (cx, cy + 30),
                        self._confidence_color(gate.confidence), anchor="midtop")

    # ------------------------------------------------------------------ #
    #  Pedestrian                                                          #
    # ------------------------------------------------------------------ #

    def draw_pedestrian(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        ped = snap.pedestrian
        centre = self._ipt(self.transform.to_screen(ped.x, ped.y))
        tip_venue = heading_tip(ped.x, ped.y, ped.heading_deg, self.HEADING_ARROW_UNITS)
        tip = self._ipt(self.transform.to_screen(*tip_venue))
        pygame.draw.line(surface, self.PEDESTRIAN_COLOR, centre, tip, 3)
        pygame.draw.circle(surface, self.PEDESTRIAN_RING_COLOR, tip, 3)
        pygame.draw.circle(surface, self.PEDESTRIAN_COLOR, centre, self.PEDESTRIAN_RADIUS_PX)
        pygame.draw.circle(
            surface, self.PEDESTRIAN_RING_COLOR, centre, self.PEDESTRIAN_RADIUS_PX, width=2
        )
        render_text(surface, self.font_tiny, "User", (centre[0], centre[1] - 12),
                    self.TEXT_COLOR, anchor="midbottom")
