import unittest

from envhealth import session_manager
from envhealth.config import Settings, settings
from envhealth.dashboard import HealthDashboard
from envhealth.data_sources import build_data_source


def _dashboard():
    static = Settings(data_source="static")
    return HealthDashboard(build_data_source(static), settings=static)


class TestSessionManager(unittest.TestCase):
    def setUp(self):
        session_manager.use_in_memory_store_for_tests()
        session_manager.clear_sessions()

    def test_session_lifecycle(self):
        first = _dashboard()
        sid = session_manager.create_session(first)
        self.assertIs(session_manager.get_session(sid), first)

        second = _dashboard()
        session_manager.update_session(sid, second)
        self.assertIs(session_manager.get_session(sid), second)

        session_manager.delete_session(sid)
        self.assertIsNone(session_manager.get_session(sid))

    def test_clear_sessions(self):
        a = session_manager.create_session(_dashboard())
        b = session_manager.create_session(_dashboard())
        session_manager.clear_sessions()
        self.assertIsNone(session_manager.get_session(a))
        self.assertIsNone(session_manager.get_session(b))

    def test_store_built_from_settings(self):
        orig_ttl, orig_max_age = settings.session_ttl_seconds, settings.session_max_age_seconds
        try:
            settings.session_ttl_seconds = 120
            settings.session_max_age_seconds = 600
            store = session_manager._init_store()
            self.assertEqual(store.ttl, 120)
            self.assertEqual(store.max_age, 600)
        finally:
            settings.session_ttl_seconds = orig_ttl
            settings.session_max_age_seconds = orig_max_age


if __name__ == "__main__":
    unittest.main()
