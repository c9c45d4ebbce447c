# src/ragline/settings.py
"""Configuration management for ragline.

Settings are an immutable value passed to each component at construction.
The library does not read environment variables itself; ``ragline.config``
does that at the application layer and passes explicit values here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Profiles for embedding throughput against provider rate limits
RATE_LIMIT_PROFILES: dict[str, dict[str, int]] = {
    "aggressive": {
        "embedding_parallelism": 8,
        "embedding_batch_size": 50,
    },
    "conservative": {
        "embedding_parallelism": 1,
        "embedding_batch_size": 10,
    },
}


class Settings(BaseModel):
    """Behavioral settings for ragline.

    Example:
        settings = Settings(chunk_size=300, chunk_overlap=50)

        # Or use a rate limit profile for free API tiers
        settings = Settings.with_profile("conservative")
    """

    model_config = ConfigDict(frozen=True)

    # Chunking (word windows)
    chunk_size: int = Field(default=200, gt=0)
    chunk_overlap: int = Field(default=40, ge=0)

    # Embedding orchestration
    embedding_batch_size: int = Field(default=20, gt=0)
    embedding_parallelism: int = Field(default=4, gt=0)

    # Embedding retry policy: delays are base, 2*base, 4*base, ...
    embedding_max_attempts: int = Field(default=3, gt=0)
    embedding_retry_base_delay: float = Field(default=1.0, ge=0)
    embedding_dimensions: int | None = Field(default=None, gt=0)

    # Per-request timeout (seconds) for embedding and chat calls
    request_timeout: float = Field(default=30.0, gt=0)

    # Retrieval
    default_k: int = Field(default=5, gt=0)
    max_k: int = Field(default=50, gt=0)

    # Answer synthesis
    default_top_k: int = Field(default=5, gt=0)
    max_tokens: int = Field(default=1024, gt=0)
    temperature: float = Field(default=0.2, ge=0, le=2)
    system_prompt: str | None = None

    @model_validator(mode="after")
    def _check_windows(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @classmethod
    def with_profile(cls, profile: str, **overrides: Any) -> Settings:
        """Create Settings with a rate limit profile.

        Args:
            profile: "aggressive" for paid tiers, "conservative" for free tiers.
            **overrides: Additional settings to override profile defaults.
        """
        if profile not in RATE_LIMIT_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(RATE_LIMIT_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = RATE_LIMIT_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)
