class GameError(Exception):
    """Base class for conditions reported by the game core."""


class InvalidInput(GameError, ValueError):
    """Malformed coordinate, distance or catalog entry."""


class CatalogEmpty(GameError):
    """A location pool was built from an empty catalog."""


class InvalidTransition(GameError):
    """Operation not allowed in the session's current phase."""


class SessionEnded(InvalidTransition):
    """Operation attempted after the session reached its terminal phase."""
