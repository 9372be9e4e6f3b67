from pathlib import Path


EVENT_STATE_FILE_PATH = Path("event_state.json")
PAIRING_CONFIG_FILE_PATH = Path("pairing_config.json")

DEFAULT_TEAM_FORMATS = ["Best Ball", "Scramble", "Alt Shot", "Shamble"]
TEAM_GROUP_SIZE = 4
SINGLES_GROUP_SIZE = 2

DAYS = ["day1", "day2"]
SIDES = ["front", "back"]

DAY_LABELS = {
    "day1": "Day 1",
    "day2": "Day 2",
}
SIDE_LABELS = {
    "front": "Front 9",
    "back": "Back 9",
}

DEFAULT_NUM_GROUPS = 4
