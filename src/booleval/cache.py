"""Process-wide cache of detected identifiers.

Expressions are usually evaluated many times with different parameter
values, so the identifiers each one references are scanned once and then
looked up by the exact expression text.

The default cache is unbounded: entries live for the lifetime of the
process. Set EvaluatorConfig.identifier_cache_size (or the
BOOLEVAL_IDENTIFIER_CACHE_SIZE env var) to bound it with LRU eviction.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable

from booleval.config import EvaluatorConfig
from booleval.expressions.scanner import detect_identifiers

logger = logging.getLogger(__name__)

Scanner = Callable[[str], tuple[str, ...]]


class IdentifierCache:
    """Memoizes identifier scans keyed on the exact expression string.

    Concurrent misses for the same expression may each run the scanner;
    the scanner is pure, so the last write wins with an identical value.
    The scan itself never runs under a lock.
    """

    def __init__(self, capacity: int | None = None, scanner: Scanner = detect_identifiers):
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity or None
        self._scanner = scanner
        self._entries: dict[str, tuple[str, ...]] | OrderedDict[str, tuple[str, ...]]
        if self.capacity is None:
            self._entries = {}
            self._lock = None
        else:
            self._entries = OrderedDict()
            self._lock = threading.Lock()

    def get_or_compute(self, expression: str) -> tuple[str, ...]:
        """Return the identifiers of an expression, scanning on a miss.

        Raises:
            MalformedExpression: If the expression cannot be parsed (nothing
                is cached in that case)
        """
        cached = self._get(expression)
        if cached is not None:
            return cached

        logger.debug("Identifier cache miss for %r", expression)
        identifiers = self._scanner(expression)
        self._put(expression, identifiers)
        return identifiers

    def _get(self, expression: str) -> tuple[str, ...] | None:
        if self._lock is None:
            return self._entries.get(expression)

        with self._lock:
            identifiers = self._entries.get(expression)
            if identifiers is not None:
                self._entries.move_to_end(expression)
            return identifiers

    def _put(self, expression: str, identifiers: tuple[str, ...]) -> None:
        if self._lock is None:
            self._entries[expression] = identifiers
            return

        with self._lock:
            self._entries[expression] = identifiers
            self._entries.move_to_end(expression)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted %r from identifier cache", evicted)

    def clear(self) -> None:
        """Drop every entry. Primarily for testing."""
        if self._lock is None:
            self._entries.clear()
            return

        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        if self._lock is None:
            return len(self._entries)

        with self._lock:
            return len(self._entries)

    def __contains__(self, expression: object) -> bool:
        if self._lock is None:
            return expression in self._entries

        with self._lock:
            return expression in self._entries


_default_cache: IdentifierCache | None = None
_default_lock = threading.Lock()


def get_identifier_cache() -> IdentifierCache:
    """Return the process-wide cache, building it from the environment on first use."""
    global _default_cache
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                _default_cache = _build(EvaluatorConfig.from_env())
    return _default_cache


def configure(config: EvaluatorConfig) -> IdentifierCache:
    """Replace the process-wide cache with a fresh one built from config."""
    global _default_cache
    with _default_lock:
        _default_cache = _build(config)
    return _default_cache


def _build(config: EvaluatorConfig) -> IdentifierCache:
    if config.is_bounded:
        logger.debug(
            "Identifier cache bounded to %d entries", config.identifier_cache_size
        )
    return IdentifierCache(capacity=config.identifier_cache_size)
