"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import random
import sys

import pytest

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG so knight promotion handedness is reproducible."""
    return random.Random(1234)
