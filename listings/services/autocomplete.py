"""Debounced location lookups for the add-property form."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from ..errors import ApiError
from ..models.property import LocationSuggestion
from ..utils.logging import get_logger

LOGGER = get_logger("services.autocomplete")

MIN_QUERY_LENGTH = 2
DEBOUNCE_SECONDS = 0.3

Lookup = Callable[[str], List[LocationSuggestion]]


class LocationAutocomplete:
    """Wraps a blocking lookup with a minimum length, a debounce and last-query-wins.

    ``search`` returns ``None`` when a newer query arrived during the debounce
    or while the lookup was running; callers keep whatever they showed before.
    """

    def __init__(
        self,
        lookup: Lookup,
        delay: float = DEBOUNCE_SECONDS,
        min_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        self._lookup = lookup
        self.delay = delay
        self.min_length = min_length
        self._generation = 0

    def accepts(self, query: str) -> bool:
        return len((query or "").strip()) >= self.min_length

    async def search(self, query: str) -> Optional[List[LocationSuggestion]]:
        self._generation += 1
        generation = self._generation
        text = (query or "").strip()
        if not self.accepts(text):
            return []

        await asyncio.sleep(self.delay)
        if generation != self._generation:
            return None
        try:
            suggestions = await asyncio.to_thread(self._lookup, text)
        except ApiError as exc:
            LOGGER.warning("autocomplete_failed query=%r error=%s", text, exc)
            suggestions = []
        if generation != self._generation:
            return None
        return suggestions


__all__ = ["DEBOUNCE_SECONDS", "LocationAutocomplete", "MIN_QUERY_LENGTH"]
