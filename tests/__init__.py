"""Tests for the teamdraft CLI, API and draft engine."""

from __future__ import annotations

import sys
from pathlib import Path


# Lets ``pytest`` import teamdraft from src/ without an editable install.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if SRC_DIR.is_dir() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
