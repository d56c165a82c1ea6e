"""Per-environment sample generators.

Each generator takes ``(num_samples, volume, rng)`` and returns exactly
``num_samples`` floats already scaled by ``volume``. Randomness only comes
from the ``rng`` argument so a seeded ``random.Random`` reproduces a buffer.
The event probabilities below were tuned by ear.
"""
from __future__ import annotations

import math
import random
from typing import List

from .filters import high_pass, low_pass
from .wav import SAMPLE_RATE

TWO_PI = 2 * math.pi

RAIN_NOISE_LEVEL = 0.3
RAIN_DROPLET_CHANCE = 0.001
RAIN_DROPLET_LEVEL = 0.5
RAIN_ALPHA = 0.7

OCEAN_SWELL = ((0.1, 0.5), (0.05, 0.3))  # (hz, amplitude)
OCEAN_NOISE_LEVEL = 0.1

FIRE_CRACKLE_CHANCE = 0.02
FIRE_BASE_ENVELOPE = 0.1
FIRE_HISS_LEVEL = 0.05
FIRE_ALPHA = 0.3

WIND_GUST_HZ = 0.1
WIND_ALPHA = 0.5

TONE_HZ = 432.0

CAFE_BROWN_STEP = 0.02
CAFE_BROWN_LEAK = 0.99
CAFE_MACHINE_CHANCE = 0.0005
CAFE_MACHINE_HZ = 1000.0
CAFE_MACHINE_LEVEL = 0.3

STORM_RAIN_VOLUME = 0.7
STORM_WIND_VOLUME = 0.5
STORM_THUNDER_CHANCE = 0.00001
STORM_THUNDER_LEVEL = 2.0

FOREST_RUSTLE_VOLUME = 0.3
FOREST_CHIRP_CHANCE = 0.001
FOREST_CHIRP_HZ = (2000.0, 4000.0)
FOREST_CHIRP_LEVEL = 0.2


def _noise(rng: random.Random) -> float:
    return rng.random() * 2 - 1


def white_noise(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    return [_noise(rng) * volume for _ in range(num_samples)]


def rain(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Soft white noise with sparse droplet impacts, smoothed."""
    samples = []
    for _ in range(num_samples):
        noise = _noise(rng) * RAIN_NOISE_LEVEL
        droplet = rng.random() * RAIN_DROPLET_LEVEL if rng.random() < RAIN_DROPLET_CHANCE else 0.0
        samples.append((noise + droplet) * volume)
    return low_pass(samples, RAIN_ALPHA)


def ocean(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Two slow swells plus a little surf noise."""
    samples = []
    for i in range(num_samples):
        t = i / SAMPLE_RATE
        swell = sum(math.sin(TWO_PI * hz * t) * amp for hz, amp in OCEAN_SWELL)
        samples.append((swell + _noise(rng) * OCEAN_NOISE_LEVEL) * volume)
    return samples


def fire(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Crackle bursts over a constant hiss, high-passed."""
    samples = []
    for _ in range(num_samples):
        envelope = rng.random() if rng.random() < FIRE_CRACKLE_CHANCE else FIRE_BASE_ENVELOPE
        crackle = _noise(rng) * envelope
        hiss = _noise(rng) * FIRE_HISS_LEVEL
        samples.append((crackle + hiss) * volume)
    return high_pass(samples, FIRE_ALPHA)


def wind(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Noise under a slow 0..1 gust modulation, low-passed."""
    samples = []
    for i in range(num_samples):
        t = i / SAMPLE_RATE
        gust = math.sin(TWO_PI * WIND_GUST_HZ * t) * 0.5 + 0.5
        samples.append(_noise(rng) * gust * volume)
    return low_pass(samples, WIND_ALPHA)


def frequency(
    num_samples: int,
    volume: float,
    rng: random.Random,
    *,
    freq: float = TONE_HZ,
) -> List[float]:
    # rng is unused; the signature matches the other generators
    return [math.sin(TWO_PI * freq * i / SAMPLE_RATE) * volume for i in range(num_samples)]


def cafe(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Leaky-integrated brown noise with the odd espresso machine burst."""
    samples = []
    brown = 0.0
    for i in range(num_samples):
        brown = (brown + _noise(rng) * CAFE_BROWN_STEP) * CAFE_BROWN_LEAK
        machine = 0.0
        if rng.random() < CAFE_MACHINE_CHANCE:
            machine = math.sin(TWO_PI * CAFE_MACHINE_HZ * i / SAMPLE_RATE) * CAFE_MACHINE_LEVEL
        samples.append((brown + machine) * volume)
    return samples


def storm(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Rain and wind layers with very rare thunder."""
    rain_layer = rain(num_samples, STORM_RAIN_VOLUME, rng)
    wind_layer = wind(num_samples, STORM_WIND_VOLUME, rng)
    samples = []
    for drop, gust in zip(rain_layer, wind_layer):
        thunder = _noise(rng) * STORM_THUNDER_LEVEL if rng.random() < STORM_THUNDER_CHANCE else 0.0
        samples.append((drop + gust + thunder) * volume)
    return samples


def forest(num_samples: int, volume: float, rng: random.Random) -> List[float]:
    """Rustling leaves with scattered bird chirps."""
    rustle = wind(num_samples, FOREST_RUSTLE_VOLUME, rng)
    low, high = FOREST_CHIRP_HZ
    samples = []
    for i, leaves in enumerate(rustle):
        bird = 0.0
        if rng.random() < FOREST_CHIRP_CHANCE:
            chirp_hz = low + rng.random() * (high - low)
            bird = math.sin(TWO_PI * chirp_hz * i / SAMPLE_RATE) * FOREST_CHIRP_LEVEL
        samples.append((leaves + bird) * volume)
    return samples


__all__ = [
    "cafe",
    "fire",
    "forest",
    "frequency",
    "ocean",
    "rain",
    "storm",
    "white_noise",
    "wind",
]
