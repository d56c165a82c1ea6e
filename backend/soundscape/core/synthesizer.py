from __future__ import annotations

import math
import random
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from . import generators
from .errors import InvalidParameterError, SynthesisError, UnsupportedEnvironmentError
from .wav import SAMPLE_RATE, encode_wav


class EnvironmentId(str, Enum):
    RAIN = "rain"
    OCEAN = "ocean"
    FIRE = "fire"
    WIND = "wind"
    FREQUENCY = "frequency"
    CAFE = "cafe"
    STORM = "storm"
    FOREST = "forest"


Generator = Callable[[int, float, random.Random], List[float]]

_GENERATORS: Dict[EnvironmentId, Generator] = {
    EnvironmentId.RAIN: generators.rain,
    EnvironmentId.OCEAN: generators.ocean,
    EnvironmentId.FIRE: generators.fire,
    EnvironmentId.WIND: generators.wind,
    EnvironmentId.FREQUENCY: generators.frequency,
    EnvironmentId.CAFE: generators.cafe,
    EnvironmentId.STORM: generators.storm,
    EnvironmentId.FOREST: generators.forest,
}

SUPPORTED_ENVIRONMENTS = tuple(env.value for env in EnvironmentId)


def resolve_environment(environment_id: Union[str, EnvironmentId]) -> EnvironmentId:
    if isinstance(environment_id, EnvironmentId):
        return environment_id
    try:
        return EnvironmentId(environment_id)
    except ValueError:
        raise UnsupportedEnvironmentError(environment_id) from None


def num_samples_for(duration_ms: float) -> int:
    """Number of mono samples covering ``duration_ms`` at the fixed sample rate."""
    if isinstance(duration_ms, bool) or not isinstance(duration_ms, (int, float)):
        raise InvalidParameterError(f"duration must be a number of milliseconds, got {duration_ms!r}")
    if not math.isfinite(duration_ms) or duration_ms < 0:
        raise InvalidParameterError(f"duration must be a finite, non-negative value, got {duration_ms!r}")
    return math.floor(duration_ms / 1000 * SAMPLE_RATE)


def _check_volume(volume: float) -> float:
    if isinstance(volume, bool) or not isinstance(volume, (int, float)):
        raise InvalidParameterError(f"volume must be a number, got {volume!r}")
    if not math.isfinite(volume) or not 0.0 <= volume <= 1.0:
        raise InvalidParameterError(f"volume must be within [0, 1], got {volume!r}")
    return float(volume)


def generate(
    environment_id: Union[str, EnvironmentId],
    duration_ms: float,
    volume: float,
    *,
    rng: Optional[random.Random] = None,
) -> bytes:
    """Synthesize ``duration_ms`` of the given environment and return WAV bytes.

    Every call works on its own buffers and random source, so calls can run
    concurrently from threads or an event loop executor. All input errors are
    raised before any samples are generated.
    """
    environment = resolve_environment(environment_id)
    num_samples = num_samples_for(duration_ms)
    level = _check_volume(volume)

    samples = _GENERATORS[environment](num_samples, level, rng or random.Random())
    return encode_wav(samples)


__all__ = [
    "EnvironmentId",
    "InvalidParameterError",
    "SUPPORTED_ENVIRONMENTS",
    "SynthesisError",
    "UnsupportedEnvironmentError",
    "generate",
    "num_samples_for",
    "resolve_environment",
]
