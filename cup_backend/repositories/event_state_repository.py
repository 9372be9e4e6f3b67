from pathlib import Path

from pydantic import ValidationError

from cup_backend.repositories.json_store import atomic_write_json, read_json
from cup_backend.schemas import EventState


def load_event_state(path: Path) -> EventState:
    data = read_json(path)
    if not isinstance(data, dict):
        return EventState()
    try:
        return EventState.model_validate(data)
    except ValidationError:
        return EventState()


def write_event_state(path: Path, state: EventState) -> None:
    atomic_write_json(path, state.model_dump(mode="json"))
