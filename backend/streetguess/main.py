import logging
import random
from typing import Optional, Sequence

from .config import Settings, get_settings
from .errors import InvalidInput
from .game import GameController
from .models.game import Location
from .services.catalog import load_catalog
from .services.pool import LocationPool
from .services.timer import RoundTimer

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)


def create_game(
    catalog: Optional[Sequence[Location]] = None,
    timer: Optional[RoundTimer] = None,
    settings: Optional[Settings] = None,
) -> GameController:
    """
    Build a game controller from settings.

    Args:
        catalog: Locations to play; loaded from CATALOG_PATH when omitted
        timer: Host timer; rounds never expire without one
        settings: Overrides the cached environment settings

    Returns:
        A controller ready for start_game()
    """
    settings = settings or get_settings()
    if catalog is None:
        if not settings.CATALOG_PATH:
            raise InvalidInput("No catalog given and CATALOG_PATH is not set")
        catalog = load_catalog(settings.CATALOG_PATH)

    pool = LocationPool(catalog, rng=random.Random(settings.RANDOM_SEED))
    return GameController(
        pool,
        rounds_per_game=settings.ROUNDS_PER_GAME,
        time_limit_seconds=settings.ROUND_TIME_LIMIT_SECONDS,
        timer=timer,
        max_points=settings.MAX_POINTS,
        decay_km=settings.SCORE_DECAY_KM,
    )
