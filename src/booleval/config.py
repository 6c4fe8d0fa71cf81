"""Evaluator configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

CACHE_SIZE_ENV = "BOOLEVAL_IDENTIFIER_CACHE_SIZE"


@dataclass(frozen=True)
class EvaluatorConfig:
    """Runtime settings for the evaluation facade.

    identifier_cache_size bounds the identifier cache with LRU eviction.
    None (or 0) keeps every entry for the process lifetime.
    """

    identifier_cache_size: int | None = None

    def __post_init__(self) -> None:
        if self.identifier_cache_size is not None and self.identifier_cache_size < 0:
            raise ValueError(
                f"identifier_cache_size must be >= 0, got {self.identifier_cache_size}"
            )

    @classmethod
    def from_env(cls) -> EvaluatorConfig:
        """Create config from environment variables.

        Resolution order:
        1. BOOLEVAL_IDENTIFIER_CACHE_SIZE env var (integer, 0 = unbounded)
        2. Default: unbounded
        """
        raw = os.environ.get(CACHE_SIZE_ENV, "").strip()
        if not raw:
            return cls()

        try:
            size = int(raw)
        except ValueError:
            raise ValueError(f"{CACHE_SIZE_ENV} must be an integer, got {raw!r}") from None

        return cls(identifier_cache_size=size)

    @property
    def is_bounded(self) -> bool:
        return bool(self.identifier_cache_size)
