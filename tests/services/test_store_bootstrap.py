"""
Tests for the shared store bootstrap (opsdesk_services/store.py).

The engine functions are replaced with recorders so the test engine set up
by conftest is left alone.
"""

import pytest

from opsdesk_config import OpsDeskSettings
from opsdesk_services import store
from scripts.opsdesk import main

POOL_YAML = """\
database:
  url: "sqlite://"
  pool_size: 3
  max_overflow: 4
  pool_timeout: 5
  pool_recycle: 60
"""


@pytest.fixture
def engine_calls(monkeypatch):
    """Record init_engine_from_url/create_tables calls made through init_store."""
    calls = {"init": [], "create_tables": 0}

    def _init(url, **kwargs):
        calls["init"].append((url, kwargs))
        return object()

    def _create_tables():
        calls["create_tables"] += 1

    monkeypatch.setattr(store, "init_engine_from_url", _init)
    monkeypatch.setattr(store, "create_tables", _create_tables)
    return calls


class TestInitStore:

    def test_passes_every_pool_setting(self, engine_calls):
        """All engine-related settings reach init_engine_from_url."""
        settings = OpsDeskSettings(
            database_url="sqlite://",
            echo=True,
            pool_size=3,
            max_overflow=4,
            pool_timeout=5,
            pool_recycle=60,
        )

        store.init_store(settings)

        assert engine_calls["init"] == [
            (
                "sqlite://",
                {
                    "echo": True,
                    "pool_size": 3,
                    "max_overflow": 4,
                    "pool_timeout": 5,
                    "pool_recycle": 60,
                },
            )
        ]
        assert engine_calls["create_tables"] == 1


class TestCliUsesSettings:

    def test_init_db_honours_yaml_pool_settings(self, engine_calls, tmp_path, monkeypatch):
        """The CLI builds its engine from the same pool settings as the HTTP app."""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        config = tmp_path / "settings.yaml"
        config.write_text(POOL_YAML, encoding="utf-8")

        assert main(["--config", str(config), "init-db"]) == 0

        (url, kwargs), = engine_calls["init"]
        assert url == "sqlite://"
        assert kwargs["pool_size"] == 3
        assert kwargs["max_overflow"] == 4
        assert kwargs["pool_timeout"] == 5
        assert kwargs["pool_recycle"] == 60
        assert engine_calls["create_tables"] == 1
