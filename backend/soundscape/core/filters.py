from __future__ import annotations

from typing import List, Sequence

from .errors import InvalidParameterError


def _check_alpha(alpha: float) -> None:
    if not 0.0 < alpha <= 1.0:
        raise InvalidParameterError(f"filter alpha must be within (0, 1], got {alpha!r}")


def low_pass(samples: Sequence[float], alpha: float) -> List[float]:
    """One-pole low-pass: ``y[i] = y[i-1] + alpha * (x[i] - y[i-1])`` with ``y[-1] = 0``.

    Smaller ``alpha`` smooths harder.
    """
    _check_alpha(alpha)
    out: List[float] = []
    previous = 0.0
    for sample in samples:
        previous = previous + alpha * (sample - previous)
        out.append(previous)
    return out


def high_pass(samples: Sequence[float], alpha: float) -> List[float]:
    """One-pole high-pass over the previous raw and filtered samples."""
    _check_alpha(alpha)
    out: List[float] = []
    previous_raw = 0.0
    previous_filtered = 0.0
    for sample in samples:
        filtered = alpha * (previous_filtered + sample - previous_raw)
        out.append(filtered)
        previous_raw = sample
        previous_filtered = filtered
    return out


__all__ = ["high_pass", "low_pass"]
