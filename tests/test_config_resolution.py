import unittest

from utils.config_utils import (
    DEFAULT_DATA_PATH,
    resolve_app_password,
    resolve_data_source,
    resolve_example_seed,
)


class TestAuthPasswordResolution(unittest.TestCase):
    def test_secrets_flat_app_password_wins_over_env(self):
        resolved = resolve_app_password(
            session={},
            secrets={"APP_PASSWORD": "secrets-pw"},
            env={"APP_PASSWORD": "env-pw"},
        )

        self.assertEqual(resolved["password"], "secrets-pw")
        self.assertEqual(resolved["source"], "secrets")

    def test_secrets_nested_auth_password_works(self):
        resolved = resolve_app_password(
            session={},
            secrets={"auth": {"password": "nested-pw"}},
            env={},
        )

        self.assertEqual(resolved["password"], "nested-pw")
        self.assertEqual(resolved["source"], "secrets")

    def test_env_works_when_secrets_missing(self):
        resolved = resolve_app_password(session=None, secrets=None, env={"APP_PASSWORD": "env-pw"})

        self.assertEqual(resolved["password"], "env-pw")
        self.assertEqual(resolved["source"], "env")

    def test_missing_returns_empty_password_and_missing_source(self):
        resolved = resolve_app_password(session={}, secrets={}, env={})

        self.assertEqual(resolved["password"], "")
        self.assertEqual(resolved["source"], "missing")


class TestDataSourceResolution(unittest.TestCase):
    def test_session_wins(self):
        resolved = resolve_data_source(
            session={"question_data_path": "/tmp/session.csv"},
            secrets={"QUESTION_DATA_PATH": "/tmp/secrets.csv"},
            env={"QUESTION_DATA_PATH": "/tmp/env.csv"},
        )
        self.assertEqual(resolved, {"path": "/tmp/session.csv", "source": "session"})

    def test_nested_secrets_path(self):
        resolved = resolve_data_source(session={}, secrets={"data": {"path": " logs.csv "}}, env={})
        self.assertEqual(resolved, {"path": "logs.csv", "source": "secrets"})

    def test_default_path(self):
        resolved = resolve_data_source(session={}, secrets={}, env={"QUESTION_DATA_PATH": "  "})
        self.assertEqual(resolved, {"path": DEFAULT_DATA_PATH, "source": "default"})


class TestExampleSeedResolution(unittest.TestCase):
    def test_env_seed(self):
        self.assertEqual(
            resolve_example_seed(session={}, secrets={}, env={"EXAMPLE_SEED": "7"}),
            {"seed": 7, "source": "env"},
        )

    def test_invalid_seed_is_missing(self):
        self.assertEqual(
            resolve_example_seed(session={}, secrets={"EXAMPLE_SEED": "abc"}, env={}),
            {"seed": None, "source": "missing"},
        )

    def test_no_seed(self):
        self.assertEqual(resolve_example_seed(session={}, secrets={}, env={}), {"seed": None, "source": "missing"})


if __name__ == "__main__":
    unittest.main()
