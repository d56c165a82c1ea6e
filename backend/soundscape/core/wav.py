from __future__ import annotations

import math
import struct
from typing import Sequence

from .errors import InvalidParameterError

SAMPLE_RATE = 44100
BIT_DEPTH = 16
CHANNELS = 1
HEADER_SIZE = 44

_BYTES_PER_SAMPLE = BIT_DEPTH // 8
_PCM_MAX = 32767
# RIFF/WAVE with a single 16-byte PCM "fmt " chunk followed by "data".
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def wav_header(num_samples: int) -> bytes:
    """Canonical 44-byte PCM header for ``num_samples`` mono 16-bit samples."""
    data_size = num_samples * CHANNELS * _BYTES_PER_SAMPLE
    return _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        1,
        CHANNELS,
        SAMPLE_RATE,
        SAMPLE_RATE * CHANNELS * _BYTES_PER_SAMPLE,
        CHANNELS * _BYTES_PER_SAMPLE,
        BIT_DEPTH,
        b"data",
        data_size,
    )


def _to_pcm16(sample: float) -> int:
    if not math.isfinite(sample):
        raise InvalidParameterError(f"cannot encode non-finite sample {sample!r}")
    return int(max(-_PCM_MAX, min(_PCM_MAX, sample * _PCM_MAX)))


def encode_wav(samples: Sequence[float]) -> bytes:
    """Encode float samples in [-1, 1] as a mono 16-bit PCM WAV file.

    Out-of-range samples saturate at +/-32767 instead of wrapping.
    """
    frames = struct.pack(f"<{len(samples)}h", *(_to_pcm16(s) for s in samples))
    return wav_header(len(samples)) + frames


__all__ = ["BIT_DEPTH", "CHANNELS", "HEADER_SIZE", "SAMPLE_RATE", "encode_wav", "wav_header"]
