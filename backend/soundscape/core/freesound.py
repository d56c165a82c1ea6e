# soundscape/core/freesound.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ..config import settings

LOGGER = logging.getLogger(__name__)

SEARCH_FIELDS = "id,name,description,download,previews,duration,tags"

ENVIRONMENT_QUERIES: Dict[str, List[str]] = {
    "forest": [
        "forest ambience birds",
        "nature sounds forest",
        "woodland atmosphere",
        "bird song forest",
        "tropical forest",
    ],
    "storm": [
        "thunder distant",
        "storm ambience",
        "rain thunder",
        "thunderstorm",
        "lightning thunder",
    ],
}


class FreesoundError(RuntimeError):
    """Raised when the Freesound API cannot provide what was asked for."""


# Errors from a single Freesound call. aiohttp raises asyncio.TimeoutError,
# not a ClientError, when ClientTimeout expires.
UPSTREAM_ERRORS = (FreesoundError, aiohttp.ClientError, asyncio.TimeoutError, ValueError)


def environment_queries(environment_id: str) -> List[str]:
    return ENVIRONMENT_QUERIES.get(environment_id) or [f"{environment_id} ambience"]


class FreesoundClient:
    """Minimal async client for the Freesound v2 API.

    Used as the fallback producer when procedural synthesis fails, and to
    back the sample search endpoint.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout

    # ------------------------------
    # settings are resolved on every call
    # ------------------------------
    @property
    def api_key(self) -> Optional[str]:
        return self._api_key or settings.freesound_api_key

    @property
    def base_url(self) -> str:
        return (self._base_url or settings.freesound_base_url).rstrip("/")

    def _session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(total=self._timeout or settings.freesound_timeout)
        return aiohttp.ClientSession(timeout=timeout)

    def _require_key(self) -> str:
        key = self.api_key
        if not key:
            raise FreesoundError("FREESOUND_API_KEY is not configured")
        return key

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        async with self._session() as session:
            async with session.get(url, params=params) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    raise FreesoundError(f"Freesound HTTP {resp.status}: {body[:300]}")
                return await resp.json()

    # ------------------------------
    # public API
    # ------------------------------
    async def search_samples(self, query: str, page: int = 1, page_size: int = 20) -> Dict[str, Any]:
        key = self._require_key()
        params = {
            "query": query,
            "page": page,
            "page_size": page_size,
            "fields": SEARCH_FIELDS,
            "token": key,
        }
        data = await self._get_json("/search/text/", params)
        LOGGER.debug(f"[freesound] search '{query}' -> {data.get('count', 0)} result(s)")
        return data

    async def download_sample(self, sample_id: int) -> bytes:
        key = self._require_key()
        details = await self._get_json(f"/sounds/{sample_id}/", {"token": key})
        download_url = details.get("download")
        if not download_url:
            raise FreesoundError(f"Sample {sample_id} has no download URL")

        async with self._session() as session:
            async with session.get(download_url, headers={"Authorization": f"Token {key}"}) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    raise FreesoundError(f"Freesound download HTTP {resp.status}: {body[:300]}")
                audio = await resp.read()
        LOGGER.info(f"[freesound] ⬇️ downloaded sample {sample_id}, {len(audio)} bytes")
        return audio

    async def get_preview_url(self, sample_id: int) -> str:
        key = self._require_key()
        details = await self._get_json(f"/sounds/{sample_id}/", {"token": key})
        previews = details.get("previews") or {}
        url = previews.get("preview-hq-mp3")
        if not url:
            raise FreesoundError(f"Sample {sample_id} has no HQ mp3 preview")
        return url

    async def get_environment_samples(self, environment_id: str) -> List[bytes]:
        """Download up to two samples for each of the environment's search queries."""
        samples: List[bytes] = []
        for query in environment_queries(environment_id):
            try:
                result = await self.search_samples(query, page=1, page_size=5)
            except UPSTREAM_ERRORS as exc:
                LOGGER.warning(f"[freesound] search failed for '{query}': {exc}")
                continue
            for sample in (result.get("results") or [])[:2]:
                try:
                    samples.append(await self.download_sample(sample["id"]))
                except UPSTREAM_ERRORS + (KeyError,) as exc:
                    LOGGER.warning(f"[freesound] download failed for {sample.get('id')}: {exc}")
        return samples

    async def generate_environment_audio(self, environment_id: str, duration_ms: float, volume: float) -> bytes:
        """Return the first downloaded sample for the environment as-is.

        ``duration_ms`` and ``volume`` are accepted to match the synthesizer
        contract; the sample is not trimmed, looped or rescaled.
        """
        self._require_key()
        samples = await self.get_environment_samples(environment_id)
        if not samples:
            raise FreesoundError(f"No samples found for environment: {environment_id}")
        return samples[0]


freesound_client = FreesoundClient()


__all__ = ["FreesoundClient", "FreesoundError", "UPSTREAM_ERRORS", "environment_queries", "freesound_client"]
