"""
dexsearch/app_utils.py
──────────────────────
Shared utilities for the desktop front-end (app.py).
Nothing here imports customtkinter, so it stays importable headless.

Exports
-------
C                           – colour palette dict
load_settings(path)
save_settings(settings, path)
resolve_catalog_path(settings)
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from dexsearch.config import DEFAULT_CATALOG_PATH, DEFAULT_SETTINGS, SETTINGS_FILE

logger = logging.getLogger(__name__)

# ── Colour palette ────────────────────────────────────────────────────────────
C: dict = {
    "bg_dark":   "#0f0f0f",
    "bg_card":   "#1a1a2e",
    "bg_input":  "#16213e",
    "accent":    "#7c3aed",
    "accent_h":  "#6d28d9",
    "green":     "#22c55e",
    "red":       "#ef4444",
    "text":      "#e2e8f0",
    "text_dim":  "#94a3b8",
    "border":    "#334155",
}


# ── Settings ──────────────────────────────────────────────────────────────────

def load_settings(path: Path = SETTINGS_FILE) -> dict:
    """Return saved settings merged over DEFAULT_SETTINGS."""
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                return {**DEFAULT_SETTINGS, **json.load(f)}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return dict(DEFAULT_SETTINGS)


def save_settings(settings: dict, path: Path = SETTINGS_FILE) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def resolve_catalog_path(settings: dict) -> Path:
    """The configured catalog file, falling back to the bundled one if it vanished."""
    configured: Optional[str] = settings.get("catalog_path")
    if configured and Path(configured).exists():
        return Path(configured)
    if configured:
        logger.warning("Catalog %s not found, using bundled catalog", configured)
    return DEFAULT_CATALOG_PATH
