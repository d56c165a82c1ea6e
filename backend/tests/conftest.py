from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
BACKEND_PATH = ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fast_stream(monkeypatch: pytest.MonkeyPatch) -> None:
    """Shrink stream chunks and drop pacing so streaming tests stay quick."""
    from soundscape.config import settings

    monkeypatch.setattr(settings, "stream_chunk_ms", 50)
    monkeypatch.setattr(settings, "stream_pace_ms", 0)
    monkeypatch.setattr(settings, "default_stream_duration_ms", 200)
