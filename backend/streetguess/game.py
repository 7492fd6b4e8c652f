import logging
from typing import Optional, Sequence, Union

from .errors import InvalidTransition
from .models.game import GeoPoint, Location, Phase, RoundView, SessionSnapshot
from .services.pool import LocationPool
from .services.projection import round_view
from .services.session import GameSession
from .services.timer import RoundTimer

logger = logging.getLogger(__name__)


class GameController:
    """
    Owns the active game session and its round timer.

    The controller starts a countdown whenever a round opens, cancels it when
    a guess resolves the round, and forwards expiries tagged with the session
    and round they were started for. Starting a new game discards the old
    session.
    """

    def __init__(
        self,
        catalog: Union[Sequence[Location], LocationPool],
        rounds_per_game: int = 5,
        time_limit_seconds: Optional[float] = None,
        timer: Optional[RoundTimer] = None,
        max_points: int = 5000,
        decay_km: float = 2000.0,
    ):
        self.pool = catalog if isinstance(catalog, LocationPool) else LocationPool(catalog)
        self.rounds_per_game = rounds_per_game
        self.time_limit_seconds = time_limit_seconds
        self.timer = timer
        self.max_points = max_points
        self.decay_km = decay_km
        self.session: Optional[GameSession] = None

        if time_limit_seconds and timer is None:
            logger.warning("Round time limit set but no timer supplied; rounds will not expire")

    def start_game(self) -> SessionSnapshot:
        """Start a new game session, discarding any current one."""
        if self.session is not None:
            logger.info("Discarding game at round %d for a new game", self.session.round_index)
        self._cancel_timer()

        self.session = GameSession(
            self.pool,
            self.rounds_per_game,
            max_points=self.max_points,
            decay_km=self.decay_km,
        )
        self._start_round_timer()
        return self.session.snapshot()

    def current(self) -> SessionSnapshot:
        """Get the current game state."""
        return self._require_session().snapshot()

    def view(self) -> RoundView:
        """Get the presentation view of the current game."""
        return round_view(self.current())

    def place_marker(self, latitude: float, longitude: float) -> SessionSnapshot:
        """Place or move the tentative guess for the current round."""
        return self._require_session().place_marker(GeoPoint(lat=latitude, lon=longitude))

    def submit_guess(self, latitude: float, longitude: float) -> RoundView:
        """Submit a guess for the current round."""
        snapshot = self._require_session().submit_guess(GeoPoint(lat=latitude, lon=longitude))
        self._cancel_timer()
        return round_view(snapshot)

    def next_round(self) -> SessionSnapshot:
        """Advance past a resolved round."""
        snapshot = self._require_session().advance()
        if snapshot.phase is Phase.IN_ROUND:
            self._start_round_timer()
        return snapshot

    def delete_current_game(self) -> None:
        """Drop the current game."""
        self._require_session()
        self._cancel_timer()
        self.session = None

    # ---------- helpers ----------
    def _require_session(self) -> GameSession:
        if self.session is None:
            raise InvalidTransition("No active game found. Start a new game.")
        return self.session

    def _start_round_timer(self) -> None:
        if self.timer is None or not self.time_limit_seconds:
            return
        session = self.session
        round_index = session.round_index

        def _on_expire() -> None:
            self._on_round_expired(session, round_index)

        self.timer.start(self.time_limit_seconds, _on_expire)

    def _cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()

    def _on_round_expired(self, session: GameSession, round_index: int) -> None:
        if session is not self.session:
            logger.debug("Ignoring expiry from a discarded game")
            return
        try:
            session.expire_round(round_index)
        except InvalidTransition as e:
            # a guess won the race; the round is already resolved
            logger.debug("Late round expiry ignored: %s", e)
