from dataclasses import asdict
from pathlib import Path
from typing import Callable

from fastapi import FastAPI, HTTPException

from cup_backend.repositories.event_state_repository import load_event_state
from cup_backend.schemas import PairDayRequest, PairOptions, PairRoundRequest
from cup_backend.services.autopair_service import RoundReport, pair_all, pair_day, pair_round
from cup_backend.services.host_service import JsonFileHost, groups_signature
from cup_backend.services.pairing_config_service import PairingSettings, settings_as_dict


def _response(host: JsonFileHost, reports: list[RoundReport]) -> dict:
    return {
        "reports": [asdict(r) for r in reports],
        "notices": host.notices,
        "errors": host.errors,
        "signature": host.signature or groups_signature(host.state),
    }


def register_autopair_routes(
    app: FastAPI,
    state_path: Path,
    settings_loader: Callable[[], PairingSettings],
) -> None:
    def check_day(settings: PairingSettings, day: str) -> None:
        if day not in settings.days:
            raise HTTPException(status_code=400, detail=f"Unknown day '{day}'.")

    def check_side(settings: PairingSettings, side: str) -> None:
        if side not in settings.sides:
            raise HTTPException(status_code=400, detail=f"Unknown side '{side}'.")

    @app.get("/state")
    async def get_state():
        state = load_event_state(state_path)
        return {
            "state": state.model_dump(mode="json"),
            "settings": settings_as_dict(settings_loader()),
            "signature": groups_signature(state),
        }

    @app.post("/autopair/round")
    async def autopair_round(body: PairRoundRequest):
        """
        Pairs one round; day and side default to the round currently shown.
        """
        settings = settings_loader()
        state = load_event_state(state_path)
        day = body.day or state.current_day
        side = body.side or state.current_side
        check_day(settings, day)
        check_side(settings, side)

        host = JsonFileHost(state_path, state)
        report = pair_round(state, host, day, side, options=body, settings=settings)
        return _response(host, [report] if report else [])

    @app.post("/autopair/day")
    async def autopair_day(body: PairDayRequest):
        settings = settings_loader()
        state = load_event_state(state_path)
        day = body.day or state.current_day
        check_day(settings, day)

        host = JsonFileHost(state_path, state)
        reports = pair_day(state, host, day, options=body, settings=settings)
        return _response(host, reports)

    @app.post("/autopair/all")
    async def autopair_all(body: PairOptions):
        settings = settings_loader()
        state = load_event_state(state_path)

        host = JsonFileHost(state_path, state)
        reports = pair_all(state, host, options=body, settings=settings)
        return _response(host, reports)
