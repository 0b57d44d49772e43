#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Simulation tuning can be overridden via ``VALET_*`` environment variables
(see :func:`policy_from_env`).  This module only imports the
dependency-free :mod:`valet.policy` leaf.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from valet.policy import PolicyError, ValetPolicy

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_SEED: Optional[int] = None

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1280
WINDOW_HEIGHT: int = 720
TARGET_FPS: int = 60

# ── API defaults ─────────────────────────────────────────────────────────────
API_HOST: str = "0.0.0.0"
API_PORT: int = 8000

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "valet.log"
DISPATCH_LOG_FILE: str = "dispatch_debug.log"


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


# env var → (policy field, parser)
ENV_OVERRIDES: Dict[str, tuple] = {
    "VALET_TRIGGER_THRESHOLD": ("trigger_threshold", float),
    "VALET_SUSTAIN_TICKS": ("sustain_ticks", int),
    "VALET_REDIRECT": ("redirect_enabled", _parse_bool),
    "VALET_APPROACH_RADIUS": ("approach_radius", float),
    "VALET_BEACON_RANGE": ("beacon_max_range", float),
    "VALET_GATE_MAX_DISTANCE": ("gate_max_distance", float),
    "VALET_TICK_MS": ("tick_interval_ms", int),
    "VALET_PROXIMITY_WEIGHT": ("proximity_weight", float),
    "VALET_VECTOR_WEIGHT": ("vector_weight", float),
    "VALET_DWELL_WEIGHT": ("dwell_weight", float),
    "VALET_WALKING_SPEED": ("walking_speed", float),
    "VALET_LOG_CAPACITY": ("log_capacity", int),
}


def policy_from_env(environ: Optional[Mapping[str, str]] = None) -> ValetPolicy:
    """Build a :class:`ValetPolicy`, applying any ``VALET_*`` overrides.

    Raises
    ------
    PolicyError
        If a variable cannot be parsed or the resulting policy is invalid.
    """
    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for var, (field_name, parse) in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = parse(raw)
        except ValueError as exc:
            raise PolicyError(f"{var}={raw!r}: {exc}") from exc
    return ValetPolicy(**overrides)


def seed_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    env = os.environ if environ is None else environ
    raw = env.get("VALET_SEED")
    if not raw:
        return DEFAULT_SEED
    try:
        return int(raw)
    except ValueError as exc:
        raise PolicyError(f"VALET_SEED={raw!r}: {exc}") from exc
