"""Runtime configuration for the lab API.

Settings are read from environment variables (optionally loaded from a
.env file) with built-in defaults:

    VLAB_LATENCY_MIN_MS - lower bound of the simulated fetch delay (default 200)
    VLAB_LATENCY_MAX_MS - upper bound of the simulated fetch delay (default 700)
    VLAB_MAX_SESSIONS - maximum number of concurrent lab sessions (default 100)
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

ENV_PREFIX = "VLAB_"


class LabSettings(BaseModel):
    """Configuration for the lab session registry.

    Args:
        latency_min_ms: Lower bound of the simulated network delay.
        latency_max_ms: Upper bound of the simulated network delay.
        max_sessions: Maximum number of concurrent sessions.
    """

    latency_min_ms: int = Field(default=200, ge=0)
    latency_max_ms: int = Field(default=700, ge=0)
    max_sessions: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def check_latency_window(self) -> "LabSettings":
        if self.latency_max_ms < self.latency_min_ms:
            raise ValueError(
                f"latency_max_ms ({self.latency_max_ms}) must be >= "
                f"latency_min_ms ({self.latency_min_ms})"
            )
        return self

    @property
    def latency_ms(self) -> tuple[int, int]:
        return (self.latency_min_ms, self.latency_max_ms)

    @classmethod
    def from_env(cls) -> "LabSettings":
        """Build settings from VLAB_* environment variables.

        Unset variables fall back to the field defaults. Pydantic coerces
        the string values and rejects invalid ones.
        """
        load_dotenv()
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls(**values)
