import hashlib
import json
import logging
from pathlib import Path
from typing import Protocol

from cup_backend.repositories.event_state_repository import write_event_state
from cup_backend.schemas import EventState

logger = logging.getLogger(__name__)


class PairingHost(Protocol):
    def persist(self) -> None: ...

    def render(self) -> None: ...

    def notify(self, message: str) -> None: ...

    def fail(self, message: str) -> None: ...


def groups_signature(state: EventState) -> str:
    obj = {
        "num_groups": state.num_groups,
        "format": state.format,
        "groups": state.groups,
    }
    return hashlib.sha1(json.dumps(obj, sort_keys=True, ensure_ascii=False).encode("utf-8")).hexdigest()


class JsonFileHost:
    """
    Host that keeps the event state in a JSON file.

    render() does not draw anything; it refreshes the board signature that
    clients compare to decide whether to reload.
    """

    def __init__(self, path: Path, state: EventState):
        self.path = path
        self.state = state
        self.notices: list[str] = []
        self.errors: list[str] = []
        self.signature: str | None = None
        self.persist_count = 0
        self.render_count = 0

    def persist(self) -> None:
        write_event_state(self.path, self.state)
        self.persist_count += 1

    def render(self) -> None:
        self.signature = groups_signature(self.state)
        self.render_count += 1

    def notify(self, message: str) -> None:
        logger.warning(message)
        self.notices.append(message)

    def fail(self, message: str) -> None:
        logger.error(message)
        self.errors.append(message)
