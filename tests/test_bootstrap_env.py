import json
import os

import pytest

from matharena import bootstrap_env


@pytest.fixture(autouse=True)
def isolated_environ(monkeypatch):
    """Writes made by the code under test stay local to each test."""
    monkeypatch.setattr(os, "environ", dict(os.environ))


@pytest.fixture
def tmp_credentials_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(bootstrap_env.tempfile, "gettempdir", lambda: str(tmp_path))
    os.environ.pop("GOOGLE_APPLICATION_CREDENTIALS", None)
    os.environ.pop("GOOGLE_CREDENTIALS_JSON", None)
    return tmp_path


class TestSecretsBridge:
    """Test flattening Streamlit secrets into environment variables."""

    def test_flat_and_nested(self):
        os.environ.pop("FIRESTORE_COLLECTION", None)
        os.environ.pop("FIREBASE_PROJECT_ID", None)
        bootstrap_env._bridge_secrets_to_env({
            "firestore_collection": "participanti_test",
            "firebase": {"project-id": "matharena"},
        })
        assert os.environ["FIRESTORE_COLLECTION"] == "participanti_test"
        assert os.environ["FIREBASE_PROJECT_ID"] == "matharena"

    def test_does_not_override_env(self, monkeypatch):
        monkeypatch.setenv("FIRESTORE_COLLECTION", "from_env")
        bootstrap_env._bridge_secrets_to_env({"FIRESTORE_COLLECTION": "from_secrets"})
        assert os.environ["FIRESTORE_COLLECTION"] == "from_env"


class TestCredentials:
    """Test materialising inline service-account JSON."""

    def test_existing_path_kept(self, tmp_credentials_dir, monkeypatch):
        path = tmp_credentials_dir / "sa.json"
        path.write_text("{}", encoding="utf-8")
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(path))
        bootstrap_env._materialize_google_credentials({})
        assert os.environ["GOOGLE_APPLICATION_CREDENTIALS"] == str(path)

    def test_inline_json_in_env(self, tmp_credentials_dir, monkeypatch):
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", '{"project_id": "matharena"}')
        bootstrap_env._materialize_google_credentials({})
        written = tmp_credentials_dir / bootstrap_env.CREDENTIALS_TMP_NAME
        assert os.environ["GOOGLE_APPLICATION_CREDENTIALS"] == str(written)
        assert json.loads(written.read_text(encoding="utf-8")) == {"project_id": "matharena"}

    def test_secret_table(self, tmp_credentials_dir):
        bootstrap_env._materialize_google_credentials({"GOOGLE_CREDENTIALS_JSON": {"project_id": "matharena"}})
        written = tmp_credentials_dir / bootstrap_env.CREDENTIALS_TMP_NAME
        assert json.loads(written.read_text(encoding="utf-8"))["project_id"] == "matharena"

    def test_invalid_json_ignored(self, tmp_credentials_dir):
        bootstrap_env._materialize_google_credentials({"GOOGLE_CREDENTIALS_JSON": "not json"})
        assert "GOOGLE_APPLICATION_CREDENTIALS" not in os.environ

    def test_nothing_configured(self, tmp_credentials_dir):
        bootstrap_env._materialize_google_credentials({})
        assert "GOOGLE_APPLICATION_CREDENTIALS" not in os.environ

    def test_written_credentials_are_logged(self, tmp_credentials_dir, caplog):
        with caplog.at_level("INFO", logger=bootstrap_env.__name__):
            bootstrap_env._materialize_google_credentials({"GOOGLE_CREDENTIALS_JSON": {"project_id": "matharena"}})
        assert any("Service account credentials written" in r.getMessage() for r in caplog.records)
