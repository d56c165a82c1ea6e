from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import AsyncIterator, List, Optional

from ..config import settings
from ..core import synthesizer
from ..core.errors import InvalidParameterError, SynthesisError
from ..core.freesound import UPSTREAM_ERRORS, FreesoundClient, freesound_client

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioEnvironment:
    id: str
    name: str
    description: str
    type: str
    icon: str
    gradient: str


@dataclass(frozen=True)
class GeneratedAudio:
    data: bytes
    media_type: str
    source: str


ENVIRONMENTS: List[AudioEnvironment] = [
    AudioEnvironment("rain", "Gentle Rain", "Relaxing sound of light rain falling", "synthesized", "🌧️", "from-blue-600 to-indigo-800"),
    AudioEnvironment("forest", "Tropical Forest", "Birds singing and leaves swaying", "synthesized", "🌲", "from-green-600 to-emerald-800"),
    AudioEnvironment("ocean", "Calm Ocean", "Soft waves touching the shore", "synthesized", "🌊", "from-cyan-600 to-blue-800"),
    AudioEnvironment("fire", "Night Campfire", "Comforting crackle of the flames", "synthesized", "🔥", "from-orange-600 to-red-700"),
    AudioEnvironment("wind", "Soft Wind", "Gentle breeze through the trees", "synthesized", "💨", "from-slate-600 to-gray-800"),
    AudioEnvironment("frequency", "432Hz Frequency", "Pure tone for deep meditation", "synthesized", "🎼", "from-purple-600 to-violet-800"),
    AudioEnvironment("cafe", "Urban Café", "Cozy coffee shop ambience", "synthesized", "☕", "from-amber-700 to-brown-800"),
    AudioEnvironment("storm", "Distant Storm", "Soft thunder far away", "synthesized", "⚡", "from-gray-700 to-slate-900"),
]


class EnvironmentNotFoundError(LookupError):
    """Raised when an environment id is not in the catalog."""


def sniff_audio_mime(buf: bytes) -> str:
    """
    Rough container sniffing for fallback downloads.
    - WAV: RIFF
    - MP3: ID3 tag or a 0xFFEx frame sync
    - OGG: OggS
    Anything else is served as MP3.
    """
    head = buf[:16]
    if head.startswith(b"RIFF"):
        return "audio/wav"
    if head[:3] == b"ID3" or (len(head) > 1 and head[0] == 0xFF and (head[1] & 0xE0) == 0xE0):
        return "audio/mpeg"
    if head[:4] == b"OggS":
        return "audio/ogg"
    return "audio/mpeg"


class AudioService:
    """Serve environment audio: synthesizer first, Freesound second, text last."""

    def __init__(self, freesound: Optional[FreesoundClient] = None) -> None:
        self.freesound = freesound or freesound_client

    def list_environments(self) -> List[AudioEnvironment]:
        return list(ENVIRONMENTS)

    def get_environment(self, environment_id: str) -> AudioEnvironment:
        for environment in ENVIRONMENTS:
            if environment.id == environment_id:
                return environment
        raise EnvironmentNotFoundError(f"Environment {environment_id} not found")

    async def generate_environment_audio(self, environment_id: str, duration_ms: float, volume: float) -> GeneratedAudio:
        environment = self.get_environment(environment_id)
        max_ms = settings.max_duration_seconds * 1000
        if duration_ms > max_ms:
            raise InvalidParameterError(f"duration {duration_ms}ms exceeds the {max_ms}ms limit")

        try:
            LOGGER.info(f"[audio] 🎵 synthesizing {environment_id} for {duration_ms}ms at volume {volume}")
            data = await asyncio.to_thread(synthesizer.generate, environment_id, duration_ms, volume)
            return GeneratedAudio(data=data, media_type="audio/wav", source="synthesizer")
        except InvalidParameterError:
            raise
        except SynthesisError as synth_error:
            LOGGER.warning(f"[audio] synthesizer failed for {environment_id}: {synth_error}")

        try:
            LOGGER.info(f"[audio] 🔄 falling back to Freesound for {environment_id}")
            data = await self.freesound.generate_environment_audio(environment_id, duration_ms, volume)
            return GeneratedAudio(data=data, media_type=sniff_audio_mime(data), source="freesound")
        except UPSTREAM_ERRORS as freesound_error:
            LOGGER.warning(f"[audio] Freesound also failed for {environment_id}: {freesound_error}")

        message = f"Audio generation failed for {environment.name}. Please check logs."
        return GeneratedAudio(data=message.encode("utf-8"), media_type="text/plain", source="message")

    async def stream_environment_audio(
        self,
        environment_id: str,
        duration_ms: Optional[float] = None,
        volume: Optional[float] = None,
    ) -> AsyncIterator[bytes]:
        """Yield fixed-size WAV chunks covering ``duration_ms``, paced for real-time playback."""
        self.get_environment(environment_id)
        chunk_ms = settings.stream_chunk_ms
        total_ms = settings.default_stream_duration_ms if duration_ms is None else duration_ms
        level = settings.default_volume if volume is None else volume
        chunks = math.ceil(total_ms / chunk_ms)
        LOGGER.info(f"[audio] ▶️ streaming {environment_id}: {chunks} chunk(s) of {chunk_ms}ms")

        for index in range(chunks):
            audio = await self.generate_environment_audio(environment_id, chunk_ms, level)
            yield audio.data
            if index + 1 < chunks:
                await asyncio.sleep(settings.stream_pace_ms / 1000)
        LOGGER.info(f"[audio] 🏁 stream finished for {environment_id}")

    async def search_samples(self, query: str) -> dict:
        return await self.freesound.search_samples(query)


audio_service = AudioService()


__all__ = [
    "AudioEnvironment",
    "AudioService",
    "ENVIRONMENTS",
    "EnvironmentNotFoundError",
    "GeneratedAudio",
    "audio_service",
    "sniff_audio_mime",
]
