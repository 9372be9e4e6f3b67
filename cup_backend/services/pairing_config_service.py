from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from cup_backend.config import (
    DAYS,
    DEFAULT_TEAM_FORMATS,
    PAIRING_CONFIG_FILE_PATH,
    SIDES,
    SINGLES_GROUP_SIZE,
    TEAM_GROUP_SIZE,
)
from cup_backend.schemas import FillMode

logger = logging.getLogger(__name__)


class PairingSettings(BaseModel):
    team_formats: list[str] = Field(default_factory=lambda: list(DEFAULT_TEAM_FORMATS))
    default_fill_mode: FillMode = FillMode.OVERWRITE

    days: list[str] = Field(default_factory=lambda: list(DAYS))
    sides: list[str] = Field(default_factory=lambda: list(SIDES))

    def is_team_format(self, fmt: str | None) -> bool:
        return fmt in self.team_formats

    def group_size(self, fmt: str | None) -> int:
        # fixed by format: 2v2 needs four seats, 1v1 two
        return TEAM_GROUP_SIZE if self.is_team_format(fmt) else SINGLES_GROUP_SIZE


DEFAULT_SETTINGS = PairingSettings()


def _fallback(path: Path, error: str | None) -> tuple[PairingSettings, dict[str, Any]]:
    if error:
        logger.warning("Pairing config %s not used, falling back to defaults (%s)", path, error)
    return DEFAULT_SETTINGS, {"source": "defaults", "path": str(path), "error": error}


def load_pairing_settings(path: Path = PAIRING_CONFIG_FILE_PATH) -> tuple[PairingSettings, dict[str, Any]]:
    """
    Settings from the JSON config file plus metadata about where they came from.
    A missing, unreadable or invalid file yields the defaults.
    """
    if not path.exists():
        return _fallback(path, None)

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        return _fallback(path, f"read_error: {exc}")

    try:
        settings = PairingSettings.model_validate(payload)
    except ValidationError as exc:
        return _fallback(path, f"validation_error: {exc}")
    return settings, {"source": "file", "path": str(path), "error": None}


def settings_as_dict(settings: PairingSettings) -> dict[str, Any]:
    return settings.model_dump(mode="json")
