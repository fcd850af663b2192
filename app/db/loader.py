import json
import logging
from pathlib import Path
from typing import List, NamedTuple

from pydantic import TypeAdapter, ValidationError

from app.core.errors import LoadFailure
from app.models.farm import Farm
from app.models.request import Request
from app.models.user import User

logger = logging.getLogger("localmeat")


class Snapshot(NamedTuple):
    users: List[User]
    farms: List[Farm]
    requests: List[Request]


_ADAPTERS = {
    "users": TypeAdapter(List[User]),
    "farms": TypeAdapter(List[Farm]),
    "requests": TypeAdapter(List[Request]),
}


def load_collection(resource_dir: Path, name: str) -> list:
    """Read and validate ``<name>.json``; any problem is a LoadFailure."""
    path = Path(resource_dir) / f"{name}.json"
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError:
        raise LoadFailure(f"Could not find {name}.json in {resource_dir}")
    except (OSError, ValueError) as e:
        raise LoadFailure(f"Error loading {name}.json: {e}")

    try:
        records = _ADAPTERS[name].validate_python(raw)
    except ValidationError as e:
        raise LoadFailure(f"Error decoding {name}: {e.error_count()} invalid field(s)")

    if not records:
        raise LoadFailure(f"{name}.json is empty")
    logger.info("Loaded %d %s from JSON", len(records), name)
    return records


def load_snapshot(resource_dir: Path) -> Snapshot:
    """Load users, farms and requests together. Fails as a whole."""
    return Snapshot(
        users=load_collection(resource_dir, "users"),
        farms=load_collection(resource_dir, "farms"),
        requests=load_collection(resource_dir, "requests"),
    )
