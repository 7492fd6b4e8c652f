import random
from collections import Counter

import pytest

from streetguess.errors import CatalogEmpty, InvalidInput
from streetguess.models.game import GeoPoint, Location
from streetguess.services.pool import LocationPool


class TestConstruction:

    def test_empty_catalog_refused(self):
        with pytest.raises(CatalogEmpty):
            LocationPool([])

    def test_duplicate_identifiers_refused(self, catalog):
        with pytest.raises(InvalidInput, match="paris"):
            LocationPool(catalog + [catalog[0]])

    def test_invalid_position_refused(self):
        bad = Location(id="nowhere", position=GeoPoint(lat=123, lon=0), name="Nowhere")
        with pytest.raises(InvalidInput):
            LocationPool([bad])

    def test_accepts_any_iterable(self, catalog):
        pool = LocationPool(iter(catalog))
        assert len(pool) == 4
        assert "tokyo" in pool
        assert "berlin" not in pool

    def test_catalog_keeps_order(self, catalog):
        pool = LocationPool(catalog)
        assert isinstance(pool.catalog, tuple)
        assert list(pool.catalog) == catalog


class TestDraw:

    def test_never_returns_excluded(self, pool):
        for _ in range(200):
            assert pool.draw(excluding={"paris", "london", "tokyo"}).id == "sydney"

    def test_draws_cover_remaining_candidates(self, pool):
        seen = {pool.draw(excluding={"paris"}).id for _ in range(200)}
        assert seen == {"london", "tokyo", "sydney"}

    def test_full_exclusion_falls_back_to_catalog(self, pool, catalog):
        everything = {loc.id for loc in catalog}
        drawn = pool.draw(excluding=everything)
        assert drawn in catalog

    def test_no_exclusion_by_default(self, pool, catalog):
        assert pool.draw() in catalog

    def test_seeded_pools_agree(self, catalog):
        a = LocationPool(catalog, rng=random.Random(7))
        b = LocationPool(catalog, rng=random.Random(7))
        assert [a.draw().id for _ in range(10)] == [b.draw().id for _ in range(10)]


class TestShuffleOrder:

    def test_is_permutation(self, pool, catalog):
        shuffled = pool.shuffle_order()
        assert sorted(loc.id for loc in shuffled) == sorted(loc.id for loc in catalog)

    def test_does_not_mutate_input(self, pool, catalog):
        original = list(catalog)
        result = pool.shuffle_order(catalog)
        assert catalog == original
        assert result is not catalog

    def test_roughly_uniform(self, catalog):
        pool = LocationPool(catalog[:3], rng=random.Random(42))
        counts = Counter(tuple(loc.id for loc in pool.shuffle_order()) for _ in range(6000))
        # 3! = 6 permutations, ~1000 each
        assert len(counts) == 6
        assert all(800 < n < 1200 for n in counts.values())

    def test_empty_and_single(self, pool, catalog):
        assert pool.shuffle_order([]) == []
        assert pool.shuffle_order(catalog[:1]) == catalog[:1]
