import random

import pytest

from streetguess.models.game import GeoPoint, Location
from streetguess.services.pool import LocationPool
from streetguess.services.timer import RoundTimer


PARIS = GeoPoint(lat=48.8566, lon=2.3522)
LONDON = GeoPoint(lat=51.5074, lon=-0.1278)
TOKYO = GeoPoint(lat=35.6762, lon=139.6503)
SYDNEY = GeoPoint(lat=-33.8688, lon=151.2093)


class FakeTimer(RoundTimer):
    """Timer the test fires by hand."""

    def __init__(self):
        self.durations = []
        self.callbacks = []
        self.cancel_count = 0
        self.active = None

    def start(self, duration_seconds, on_expire):
        self.durations.append(duration_seconds)
        self.callbacks.append(on_expire)
        self.active = on_expire

    def cancel(self):
        self.cancel_count += 1
        self.active = None

    def fire(self):
        callback, self.active = self.active, None
        callback()


@pytest.fixture()
def catalog():
    return [
        Location(id="paris", position=PARIS, name="Paris"),
        Location(id="london", position=LONDON, name="London"),
        Location(id="tokyo", position=TOKYO, name="Tokyo"),
        Location(id="sydney", position=SYDNEY, name="Sydney"),
    ]


@pytest.fixture()
def pool(catalog):
    return LocationPool(catalog, rng=random.Random(1234))


@pytest.fixture()
def fake_timer():
    return FakeTimer()
