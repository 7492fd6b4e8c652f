import logging
import random
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from ..errors import CatalogEmpty, InvalidInput
from ..models.game import Location
from .scoring import validate_point

logger = logging.getLogger(__name__)


class LocationPool:
    """
    Fixed catalog of locations with repetition-avoiding random draws.

    When every identifier has already been used, draws fall back to the full
    catalog so a round can always start, even when the catalog is smaller
    than the number of rounds in a game.
    """

    def __init__(self, catalog: Iterable[Location], rng: Optional[random.Random] = None):
        self._catalog: Tuple[Location, ...] = tuple(catalog)
        if not self._catalog:
            raise CatalogEmpty("Cannot build a location pool from an empty catalog.")

        seen = set()
        for location in self._catalog:
            if location.id in seen:
                raise InvalidInput(f"Duplicate location identifier in catalog: {location.id!r}")
            seen.add(location.id)
            validate_point(location.position)

        self._ids = frozenset(seen)
        self._rng = rng or random.Random()

    @property
    def catalog(self) -> Tuple[Location, ...]:
        return self._catalog

    def __len__(self) -> int:
        return len(self._catalog)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._ids

    def draw(self, excluding: AbstractSet[str] = frozenset()) -> Location:
        """
        Pick a location uniformly at random among those not in `excluding`.

        Args:
            excluding: Identifiers already shown this session

        Returns:
            A catalog location; any catalog location if all are excluded
        """
        candidates = [loc for loc in self._catalog if loc.id not in excluding]
        if not candidates:
            logger.info("Catalog of %d locations exhausted, allowing repeats", len(self._catalog))
            candidates = list(self._catalog)
        return self._rng.choice(candidates)

    def shuffle_order(self, catalog: Optional[Sequence[Location]] = None) -> List[Location]:
        """Return a uniformly shuffled copy of `catalog` (defaults to the pool's own)."""
        items = list(self._catalog if catalog is None else catalog)
        # Fisher-Yates, walking down from the end
        for i in range(len(items) - 1, 0, -1):
            j = self._rng.randint(0, i)
            items[i], items[j] = items[j], items[i]
        return items
