# tests/conftest.py - shared fixtures

import pytest

from hitzkale.core.controller import QueryController
from hitzkale.core.dictionary import DictionaryStore
from hitzkale.core.models import WordEntry

SAMPLE_ROWS = [
    {"id": 1, "word": "etxe", "translation": "casa"},
    {"id": 2, "word": "etxekide", "translation": "compañero de casa"},
    {"id": 3, "word": "etxetegi", "translation": "caserío"},
]


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch):
    """Keep app log files out of the working tree."""
    monkeypatch.setattr("hitzkale.utils.logger_utils.DEFAULT_LOG_PATH", str(tmp_path / "logs" / "test.log"))
    monkeypatch.delenv("HITZKALE_CONFIG", raising=False)


@pytest.fixture
def sample_entries():
    return [WordEntry(**row) for row in SAMPLE_ROWS]


@pytest.fixture
def sample_store():
    return DictionaryStore.from_sources(SAMPLE_ROWS)


@pytest.fixture
def controller(sample_store):
    return QueryController(sample_store, suffixes=["kide", "tegi"], latency=0)


@pytest.fixture(scope="session")
def bundled_store():
    return DictionaryStore.load_default()


@pytest.fixture
def bundled_controller(bundled_store):
    return QueryController(bundled_store, latency=0)
