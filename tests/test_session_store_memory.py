import time
import unittest

from envhealth.dashboard import HealthDashboard
from envhealth.data_sources import build_data_source
from envhealth.config import Settings
from envhealth.session_store.memory import InMemorySessionStore


def _dashboard():
    settings = Settings(data_source="static")
    return HealthDashboard(build_data_source(settings), settings=settings)


class TestInMemorySessionStore(unittest.TestCase):
    def test_create_and_get_refreshes_ttl(self):
        store = InMemorySessionStore(ttl_seconds=2)
        sid = store.create_session(_dashboard())
        self.assertIsNotNone(store.get_session(sid))
        time.sleep(1.2)
        # Access should refresh TTL; should still exist
        self.assertIsNotNone(store.get_session(sid))
        time.sleep(2.1)
        self.assertIsNone(store.get_session(sid))

    def test_update_replaces_dashboard(self):
        store = InMemorySessionStore(ttl_seconds=5)
        first = _dashboard()
        sid = store.create_session(first)
        self.assertIs(store.get_session(sid), first)
        second = _dashboard()
        store.update_session(sid, second)
        self.assertIs(store.get_session(sid), second)

    def test_update_missing_is_noop(self):
        store = InMemorySessionStore(ttl_seconds=5)
        store.update_session("missing", _dashboard())
        self.assertIsNone(store.get_session("missing"))

    def test_max_age_expires_even_with_access(self):
        store = InMemorySessionStore(ttl_seconds=5, max_age_seconds=1)
        sid = store.create_session(_dashboard())
        self.assertIsNotNone(store.get_session(sid))
        time.sleep(0.6)
        self.assertIsNotNone(store.get_session(sid))
        time.sleep(0.6)
        self.assertIsNone(store.get_session(sid))

    def test_create_sweeps_expired_sessions(self):
        store = InMemorySessionStore(ttl_seconds=1)
        for _ in range(5):
            store.create_session(_dashboard())
        self.assertEqual(len(store._sessions), 5)
        time.sleep(1.2)
        live = store.create_session(_dashboard())
        self.assertEqual(list(store._sessions), [live])

    def test_sweep_keeps_recently_used_sessions(self):
        store = InMemorySessionStore(ttl_seconds=1)
        kept = store.create_session(_dashboard())
        dropped = store.create_session(_dashboard())
        time.sleep(0.6)
        self.assertIsNotNone(store.get_session(kept))
        time.sleep(0.6)
        new = store.create_session(_dashboard())
        self.assertEqual(set(store._sessions), {kept, new})
        self.assertIsNone(store.get_session(dropped))

    def test_delete_and_clear(self):
        store = InMemorySessionStore()
        a = store.create_session(_dashboard())
        b = store.create_session(_dashboard())
        store.delete_session(a)
        self.assertIsNone(store.get_session(a))
        store.clear()
        self.assertIsNone(store.get_session(b))


if __name__ == "__main__":
    unittest.main()
