"""Per-field generation counters used to drop late fetch results."""

from typing import Dict


class GenerationTracker:
    """Monotonic generation counter per snapshot field.

    A fetch calls ``begin(field)`` when it starts and only applies its result
    if ``is_current(field, generation)`` still holds when it resolves.
    """

    def __init__(self):
        self._latest: Dict[str, int] = {}

    def begin(self, field: str) -> int:
        generation = self._latest.get(field, 0) + 1
        self._latest[field] = generation
        return generation

    def is_current(self, field: str, generation: int) -> bool:
        return self._latest.get(field, 0) == generation

    def invalidate(self, *fields: str) -> None:
        """Supersede any in-flight fetch for ``fields``."""
        for field in fields:
            self.begin(field)
