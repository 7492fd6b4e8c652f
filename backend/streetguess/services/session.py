"""
Game session state machine.

A session walks through `max_rounds` rounds:

    in_round --submit_guess / expire_round--> round_resolved
    round_resolved --advance--> in_round          (more rounds left)
    round_resolved --advance--> session_over      (last round)

Only the first resolving event of a round is accepted. Guesses and timer
expiries may arrive from different threads or callbacks, so every transition
runs under one lock, and expiries carry the round index they were scheduled
for: an expiry tagged with another round is ignored.
"""

import logging
import threading
from typing import List, Optional, Sequence, Set, Union

from ..errors import InvalidInput, InvalidTransition, SessionEnded
from ..models.game import (
    GeoPoint, Location, Phase, ResolvedBy, RoundOutcome, SessionSnapshot
)
from .pool import LocationPool
from .scoring import calculate_score, haversine_distance, validate_point

logger = logging.getLogger(__name__)


class GameSession:
    """One play-through of `max_rounds` rounds over a location catalog."""

    def __init__(
        self,
        catalog: Union[Sequence[Location], LocationPool],
        max_rounds: int,
        max_points: int = 5000,
        decay_km: float = 2000.0,
    ):
        if max_rounds < 1:
            raise InvalidInput(f"max_rounds must be positive, got {max_rounds}")

        self.pool = catalog if isinstance(catalog, LocationPool) else LocationPool(catalog)
        self.max_rounds = max_rounds
        self.max_points = max_points
        self.decay_km = decay_km

        self._lock = threading.Lock()
        self._total_score = 0
        self._round_index = 1
        self._used: Set[str] = set()
        self._history: List[RoundOutcome] = []
        self._outcome: Optional[RoundOutcome] = None
        self._pending: Optional[GeoPoint] = None
        self._phase = Phase.IN_ROUND
        self._location = self._draw_location()

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def round_index(self) -> int:
        return self._round_index

    @property
    def total_score(self) -> int:
        return self._total_score

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot()

    def place_marker(self, point: GeoPoint) -> SessionSnapshot:
        """Record a tentative guess for the open round without resolving it."""
        with self._lock:
            self._require_in_round("place a marker")
            validate_point(point)
            self._pending = point
            return self._snapshot()

    def submit_guess(self, point: GeoPoint) -> SessionSnapshot:
        """Resolve the open round with an explicit guess."""
        with self._lock:
            self._require_in_round("submit a guess")
            validate_point(point)
            self._resolve(point, ResolvedBy.EXPLICIT_GUESS)
            return self._snapshot()

    def expire_round(self, round_index: Optional[int] = None) -> Optional[SessionSnapshot]:
        """
        Resolve the open round because its time ran out.

        Args:
            round_index: Round the expiring timer was started for. When it
                does not match the current round the call is ignored.

        Returns:
            The new snapshot, or None for an ignored stale expiry
        """
        with self._lock:
            if round_index is not None and round_index != self._round_index:
                logger.debug(
                    "Ignoring stale expiry for round %d (current round %d)",
                    round_index, self._round_index
                )
                return None
            self._require_in_round("expire the round")
            self._resolve(self._pending, ResolvedBy.TIMEOUT)
            return self._snapshot()

    def advance(self) -> SessionSnapshot:
        """Move past a resolved round, either to the next one or to the end."""
        with self._lock:
            if self._phase is Phase.SESSION_OVER:
                raise SessionEnded("Session is over; start a new game.")
            if self._phase is not Phase.ROUND_RESOLVED:
                raise InvalidTransition("Cannot advance before the round is resolved.")

            if self._round_index == self.max_rounds:
                self._phase = Phase.SESSION_OVER
                logger.info("Session over with total score %d", self._total_score)
                return self._snapshot()

            self._round_index += 1
            self._outcome = None
            self._pending = None
            self._location = self._draw_location()
            self._phase = Phase.IN_ROUND
            return self._snapshot()

    # ---------- helpers ----------
    def _require_in_round(self, action: str) -> None:
        if self._phase is Phase.SESSION_OVER:
            raise SessionEnded(f"Cannot {action}: session is over.")
        if self._phase is not Phase.IN_ROUND:
            raise InvalidTransition(f"Cannot {action}: round {self._round_index} is already resolved.")

    def _draw_location(self) -> Location:
        location = self.pool.draw(excluding=self._used)
        self._used.add(location.id)
        logger.info("Round %d/%d started at location %s", self._round_index, self.max_rounds, location.id)
        return location

    def _resolve(self, point: Optional[GeoPoint], resolved_by: ResolvedBy) -> None:
        if point is None:
            distance = None
            score = 0
        else:
            distance = haversine_distance(point, self._location.position)
            score = calculate_score(distance, self.max_points, self.decay_km)

        outcome = RoundOutcome(
            round_index=self._round_index,
            location_id=self._location.id,
            guessed_point=point,
            distance_km=distance,
            score=score,
            resolved_by=resolved_by,
        )
        self._outcome = outcome
        self._history.append(outcome)
        self._total_score += score
        self._phase = Phase.ROUND_RESOLVED
        logger.info(
            "Round %d resolved by %s: distance=%s km score=%d total=%d",
            self._round_index, resolved_by.value, distance, score, self._total_score
        )

    def _snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            total_score=self._total_score,
            round_index=self._round_index,
            max_rounds=self.max_rounds,
            current_location=self._location,
            used_identifiers=frozenset(self._used),
            pending_guess=self._pending,
            round_outcome=self._outcome,
            history=tuple(self._history),
            phase=self._phase,
        )
