#!/usr/bin/env python3
"""Side panels, activity log, score breakdown and help overlay (mixin)."""

from __future__ import annotations

import pygame

from valet.session import SessionSnapshot

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every panel around the map."""

    # ------------------------------------------------------------------ #
    #  Shared widgets                                                      #
    # ------------------------------------------------------------------ #

    def _card(self, surface: pygame.Surface, rect: pygame.Rect, color=None, border=None) -> None:
        pygame.draw.rect(surface, color or self.CARD_COLOR, rect, border_radius=8)
        if border is not None:
            pygame.draw.rect(surface, border, rect, width=1, border_radius=8)

    def _bar(self, surface: pygame.Surface, x: int, y: int, w: int, value: float, color) -> None:
        pygame.draw.rect(surface, self.BORDER_COLOR, (x, y, w, 6), border_radius=3)
        fill = max(0, min(w, int(w * value / 100.0)))
        if fill > 0:
            pygame.draw.rect(surface, color, (x, y, fill, 6), border_radius=3)

    def _heading(self, surface: pygame.Surface, text: str, x: int, y: int) -> int:
        render_text(surface, self.font_label, text, (x, y), self.TEXT_COLOR)
        return y + 26

    # ------------------------------------------------------------------ #
    #  Left panel: gate confidence, dispatch, pedestrian                   #
    # ------------------------------------------------------------------ #

    def draw_left_panel(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        pad = self.PANEL_PAD
        panel = pygame.Rect(0, 0, self.LEFT_PANEL_W, self.height)
        pygame.draw.rect(surface, self.PANEL_COLOR, panel)
        pygame.draw.line(surface, self.BORDER_COLOR, panel.topright, panel.bottomright)

        x, y = pad, pad
        render_text(surface, self.font_title, "Intelligent Valet", (x, y), self.TEXT_COLOR)
        y += 30
        render_text(surface, self.font_tiny, "Multi-Sensor Exit Gate Prediction",
                    (x, y), self.MUTED_TEXT_COLOR)
        y += 26

        status = "TRACKING  (SPACE to stop)" if snap.running else "IDLE  (SPACE to request car)"
        render_text(surface, self.font_small, status, (x, y),
                    self.GOOD_COLOR if snap.running else self.MUTED_TEXT_COLOR)
        y += 28

        y = self._heading(surface, "Exit Gate Confidence", x, y)
        inner_w = self.LEFT_PANEL_W - 2 * pad
        for gate in snap.gates:
            card = pygame.Rect(x, y, inner_w, 46)
            self._card(surface, card)
            render_text(surface, self.font_small, gate.name, (x + 10, y + 8), self.TEXT_COLOR)
            render_text(surface, self.font_small, f"{gate.confidence}%",
                        (card.right - 10, y + 8), self._confidence_color(gate.confidence),
                        anchor="topright")
            self._bar(surface, x + 10, y + 30, inner_w - 20, gate.confidence, gate.color)
            y += 54

        if snap.dispatch.active:
            y += 4
            card = pygame.Rect(x, y, inner_w, 70)
            self._card(surface, card, self.DISPATCH_BG_COLOR, self.DISPATCH_BORDER_COLOR)
            target = snap.gate(snap.dispatch.gate_id)
            render_text(surface, self.font_label, "Car Dispatched", (x + 10, y + 8), self.GOOD_COLOR)
            render_text(surface, self.font_small,
                        f"Gate: {target.name if target else snap.dispatch.gate_id}",
                        (x + 10, y + 32), self.GOOD_COLOR)
            render_text(surface, self.font_small, f"ETA: {snap.dispatch.eta_s} seconds",
                        (x + 10, y + 50), self.GOOD_COLOR)
            y += 78

        y += 6
        y = self._heading(surface, "User Status", x, y)
        ped = snap.pedestrian
        rows = [
            ("Position:", f"{round(ped.x)}, {round(ped.y)}"),
            ("Direction:", f"{round(ped.heading_deg)}°"),
            ("Speed:", f"{ped.speed} m/s"),
        ]
        if ped.approach_zone:
            rows.append(("Approach Zone:", f"Gate {ped.approach_zone}"))
            rows.append(("Dwell:", f"{ped.dwell_s:.1f}s"))
        for label, value in rows:
            render_text(surface, self.font_small, label, (x, y), self.MUTED_TEXT_COLOR)
            render_text(surface, self.font_small, value, (x + inner_w, y), self.TEXT_COLOR,
                        anchor="topright")
            y += 20

    # ------------------------------------------------------------------ #
    #  Right panel: sensors, weights, metrics                              #
    # ------------------------------------------------------------------ #

    def draw_right_panel(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        pad = self.PANEL_PAD
        left = self.width - self.RIGHT_PANEL_W
        panel = pygame.Rect(left, 0, self.RIGHT_PANEL_W, self.height)
        pygame.draw.rect(surface, self.PANEL_COLOR, panel)
        pygame.draw.line(surface, self.BORDER_COLOR, panel.topleft, panel.bottomleft)

        x, y = left + pad, pad
        inner_w = self.RIGHT_PANEL_W - 2 * pad

        y = self._heading(surface, "Sensor Status", x, y)
        for name, state in self.SENSORS:
            self._card(surface, pygame.Rect(x, y, inner_w, 30))
            render_text(surface, self.font_small, name, (x + 10, y + 7), self.TEXT_COLOR)
            render_text(surface, self.font_small, state, (x + inner_w - 10, y + 7),
                        self.GOOD_COLOR if state == "Active" else self.WARN_COLOR,
                        anchor="topright")
            y += 36

        y += 8
        y = self._heading(surface, "Algorithm Weights", x, y)
        policy = self.session.policy
        weights = [
            ("Proximity Score", policy.proximity_weight, (96, 165, 250)),
            ("Vector Score", policy.vector_weight, self.GOOD_COLOR),
            ("Dwell Time", policy.dwell_weight, self.WARN_COLOR),
        ]
        for label, weight, color in weights:
            self._card(surface, pygame.Rect(x, y, inner_w, 40))
            render_text(surface, self.font_small, label, (x + 10, y + 6), self.TEXT_COLOR)
            render_text(surface, self.font_small, f"{weight * 100:.0f}%",
                        (x + inner_w - 10, y + 6), color, anchor="topright")
            self._bar(surface, x + 10, y + 27, inner_w - 20, weight * 100, color)
            y += 46

        y += 8
        y = self._heading(surface, "System Metrics", x, y)
        sustain_s = policy.sustain_ticks * policy.tick_s
        rows = [
            ("Trigger Threshold:", f"{policy.trigger_threshold:.0f}%"),
            ("Sustain Period:", f"{sustain_s:.1f}s"),
            ("Update Frequency:", f"{1.0 / policy.tick_s:.0f}Hz"),
            ("Active Beacons:", f"{snap.active_beacons}/{len(snap.beacons)}"),
            ("Redirect:", "On" if policy.redirect_enabled else "Off"),
            ("Tick:", str(snap.tick)),
        ]
        for label, value in rows:
            render_text(surface, self.font_small, label, (x, y), self.MUTED_TEXT_COLOR)
            render_text(surface, self.font_small, value, (x + inner_w, y), self.GOOD_COLOR,
                        anchor="topright")
            y += 20

    # ------------------------------------------------------------------ #
    #  Activity log                                                        #
    # ------------------------------------------------------------------ #

    def draw_log_panel(self, surface: pygame.Surface, snap: SessionSnapshot, rect: pygame.Rect) -> None:
        self._card(surface, rect, self.PANEL_COLOR, self.BORDER_COLOR)
        x, y = rect.x + 12, rect.y + 8
        render_text(surface, self.font_label, "Activity Log", (x, y), self.TEXT_COLOR)
        y += 24
        if not snap.log:
            render_text(surface, self.font_small, "No activity yet", (x, y), self.MUTED_TEXT_COLOR)
            return
        for line in snap.log:
            if y > rect.bottom - 16:
                break
            render_text(surface, self.font_tiny, line, (x, y), self.TEXT_COLOR)
            y += 14

    # ------------------------------------------------------------------ #
    #  Score breakdown (F3)                                                #
    # ------------------------------------------------------------------ #

    def draw_breakdown(self, surface: pygame.Surface, snap: SessionSnapshot, left: int, top: int) -> None:
        lines = [f"{'GATE':<5}{'PROX':>7}{'VEC':>7}{'DWELL':>7}{'CONF':>6}"]
        for g in snap.gates:
            lines.append(
                f"{g.id:<5}{g.proximity:>7.1f}{g.vector:>7.1f}{g.dwell:>7.1f}{g.confidence:>6d}"
            )
        box = pygame.Rect(left, top, 250, 14 * len(lines) + 12)
        self._card(surface, box, self.BG_COLOR, self.BORDER_COLOR)
        y = top + 6
        for line in lines:
            render_text(surface, self.font_mono, line, (left + 8, y), self.GOOD_COLOR)
            y += 14

    # ------------------------------------------------------------------ #
    #  Help                                                                #
    # ------------------------------------------------------------------ #

    def draw_help(self, surface: pygame.Surface, left: int, bottom: int) -> None:
        y = bottom - 14 * len(self.HELP_LINES)
        for line in self.HELP_LINES:
            render_text(surface, self.font_mono, line, (left, y), self.MUTED_TEXT_COLOR)
            y += 14
