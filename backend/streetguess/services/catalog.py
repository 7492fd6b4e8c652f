"""
Location catalog loader.

The catalog is a JSON array of locations:

    [{"id": "paris-01", "name": "Paris", "position": {"lat": 48.8566, "lon": 2.3522}}, ...]

It is read and validated once at startup; positions and identifier
uniqueness are checked again when the list is handed to a LocationPool.
"""

from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from ..errors import InvalidInput
from ..models.game import Location


_LOCATIONS_ADAPTER = TypeAdapter(List[Location])


def load_catalog(path: Union[str, Path]) -> List[Location]:
    """Load and validate a location catalog JSON file."""
    try:
        return _LOCATIONS_ADAPTER.validate_json(Path(path).read_bytes())
    except ValidationError as e:
        raise InvalidInput(f"Invalid catalog file {path}: {e}") from e
