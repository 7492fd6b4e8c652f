from enum import Enum
from pydantic import BaseModel
from typing import Optional, Tuple, FrozenSet


class GeoPoint(BaseModel):
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float
    
    class Config:
        frozen = True


class Location(BaseModel):
    """A catalog entry: scene handle, true position and display name."""
    id: str
    position: GeoPoint
    name: str
    
    class Config:
        frozen = True


class ResolvedBy(str, Enum):
    """How a round was closed."""
    EXPLICIT_GUESS = "explicit_guess"
    TIMEOUT = "timeout"


class Phase(str, Enum):
    """Session lifecycle phase."""
    IN_ROUND = "in_round"
    ROUND_RESOLVED = "round_resolved"
    SESSION_OVER = "session_over"


class RoundOutcome(BaseModel):
    """Result of a resolved round."""
    round_index: int
    location_id: str
    guessed_point: Optional[GeoPoint] = None
    distance_km: Optional[int] = None  # None when the round timed out without a guess
    score: int
    resolved_by: ResolvedBy
    
    class Config:
        frozen = True


class SessionSnapshot(BaseModel):
    """Read-only view of a game session after a transition."""
    total_score: int
    round_index: int
    max_rounds: int
    current_location: Location
    used_identifiers: FrozenSet[str]
    pending_guess: Optional[GeoPoint] = None
    round_outcome: Optional[RoundOutcome] = None
    history: Tuple[RoundOutcome, ...] = ()
    phase: Phase
    
    class Config:
        frozen = True


class RoundView(BaseModel):
    """Presentation-ready projection of a snapshot."""
    round_number: int
    max_rounds: int
    total_score: int
    phase: Phase
    location_name: Optional[str] = None
    score: Optional[int] = None
    distance_km: Optional[int] = None
    rating: Optional[str] = None
    bearing_deg: Optional[float] = None
    compass: Optional[str] = None
    actual_latitude: Optional[float] = None
    actual_longitude: Optional[float] = None
    guess_latitude: Optional[float] = None
    guess_longitude: Optional[float] = None
    game_completed: bool = False
