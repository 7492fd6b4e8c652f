from ..models.game import Phase, RoundView, SessionSnapshot
from .scoring import compass_direction, initial_bearing, rate_distance


def round_view(snapshot: SessionSnapshot) -> RoundView:
    """
    Derive what the presentation layer shows for a snapshot.

    While a round is open nothing about the answer is exposed. Once it is
    resolved the view carries the true position, the guess, the rating and
    the compass direction from the guess to the answer.
    """
    outcome = snapshot.round_outcome
    view = RoundView(
        round_number=snapshot.round_index,
        max_rounds=snapshot.max_rounds,
        total_score=snapshot.total_score,
        phase=snapshot.phase,
        game_completed=snapshot.phase is Phase.SESSION_OVER,
    )
    if outcome is None:
        return view

    actual = snapshot.current_location.position
    updates = {
        "location_name": snapshot.current_location.name,
        "score": outcome.score,
        "distance_km": outcome.distance_km,
        "rating": rate_distance(outcome.distance_km),
        "actual_latitude": actual.lat,
        "actual_longitude": actual.lon,
    }
    guess = outcome.guessed_point
    if guess is not None:
        updates["guess_latitude"] = guess.lat
        updates["guess_longitude"] = guess.lon
        if outcome.distance_km:
            bearing = initial_bearing(guess, actual)
            updates["bearing_deg"] = round(bearing, 1)
            updates["compass"] = compass_direction(bearing)
    return view.model_copy(update=updates)
