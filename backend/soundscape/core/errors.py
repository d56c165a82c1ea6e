from __future__ import annotations


class SynthesisError(RuntimeError):
    """Base class for failures raised by the procedural synthesizer."""


class UnsupportedEnvironmentError(SynthesisError, ValueError):
    """Raised when an environment identifier has no generator."""

    def __init__(self, environment_id: object) -> None:
        super().__init__(f"Unsupported environment: {environment_id}")
        self.environment_id = environment_id


class InvalidParameterError(SynthesisError, ValueError):
    """Raised for negative, non-finite or out-of-range synthesis inputs."""


__all__ = ["InvalidParameterError", "SynthesisError", "UnsupportedEnvironmentError"]
