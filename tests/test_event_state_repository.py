import unittest
from pathlib import Path
import tempfile

from cup_backend.repositories.event_state_repository import load_event_state, write_event_state
from cup_backend.repositories.json_store import atomic_write_json
from cup_backend.schemas import EventState, Player, Pool
from cup_backend.services.host_service import JsonFileHost, groups_signature


class EventStateRepositoryTests(unittest.TestCase):
    def test_missing_or_invalid_file_gives_empty_state(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "event_state.json"
            self.assertEqual(load_event_state(p), EventState())

            p.write_text("[1, 2, 3]", encoding="utf-8")
            self.assertEqual(load_event_state(p), EventState())

            p.write_text('{"players": [{"name": "no id"}]}', encoding="utf-8")
            self.assertEqual(load_event_state(p), EventState())

    def test_written_state_is_read_back(self):
        state = EventState(
            players=[Player(id=7, name="Ann", team="valley"), Player(id="x", team="ozark")],
            format={"day1": {"front": "Scramble"}},
            groups={"day1": {"front": [[7, None, "x", None]]}},
            num_groups=1,
        )
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "nested" / "event_state.json"
            write_event_state(p, state)
            loaded = load_event_state(p)
            self.assertEqual([f.name for f in p.parent.iterdir()], ["event_state.json"])

        self.assertEqual(loaded.players[0].team, Pool.VALLEY)
        self.assertEqual(loaded.groups["day1"]["front"], [[7, None, "x", None]])

    def test_failed_write_leaves_no_files_behind(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "event_state.json"
            with self.assertRaises(TypeError):
                atomic_write_json(p, {"players": object()})
            self.assertEqual(list(Path(tmp).iterdir()), [])


class JsonFileHostTests(unittest.TestCase):
    def test_persist_and_render(self):
        state = EventState(groups={"day1": {"front": [["a", None]]}})
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "event_state.json"
            host = JsonFileHost(p, state)

            host.persist()
            host.render()
            self.assertTrue(p.exists())
            self.assertEqual(load_event_state(p).groups, state.groups)

        before = host.signature
        self.assertEqual(before, groups_signature(state))

        state.groups["day1"]["front"][0][1] = "b"
        host.render()
        self.assertNotEqual(before, host.signature)
        self.assertEqual((host.persist_count, host.render_count), (1, 2))

    def test_notices_and_errors_are_collected(self):
        host = JsonFileHost(Path("unused.json"), EventState())
        host.notify("Ozark short by 2 slot(s) on Day 1 Front 9.")
        host.fail("Auto-pair failed for Day 1 Front 9: boom")

        self.assertEqual(host.notices, ["Ozark short by 2 slot(s) on Day 1 Front 9."])
        self.assertEqual(host.errors, ["Auto-pair failed for Day 1 Front 9: boom"])


if __name__ == "__main__":
    unittest.main()
