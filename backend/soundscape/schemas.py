from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class AudioEnvironmentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    type: Literal["synthesized", "freesound", "hybrid"]
    icon: str
    gradient: str


class StreamOptions(BaseModel):
    duration: Optional[int] = Field(default=None, ge=0, description="Total stream length in milliseconds")
    volume: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class FreesoundSample(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    description: str = ""
    download: Optional[str] = None
    duration: Optional[float] = None
    tags: List[str] = Field(default_factory=list)


class FreesoundSearchResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int = 0
    results: List[FreesoundSample] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    environments: int
