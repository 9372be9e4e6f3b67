import logging

import uvicorn

from cup_backend.app_factory import create_app
from cup_backend.config import EVENT_STATE_FILE_PATH, PAIRING_CONFIG_FILE_PATH
from cup_backend.routes_autopair import register_autopair_routes
from cup_backend.services.pairing_config_service import load_pairing_settings

# python -m uvicorn cup_backend.main:app --reload --host 0.0.0.0 --port 8000

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _settings():
    settings, _meta = load_pairing_settings(PAIRING_CONFIG_FILE_PATH)
    return settings


app = create_app()
register_autopair_routes(app, EVENT_STATE_FILE_PATH, _settings)


if __name__ == "__main__":
    uvicorn.run("cup_backend.main:app", port=8080, host="0.0.0.0", reload=True)
