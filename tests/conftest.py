import pytest
from jobai.store import AiRecordStore, SettingsStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "jobai.db")


@pytest.fixture
def record_store(db_path):
    return AiRecordStore(db_path)


@pytest.fixture
def settings_store(db_path):
    return SettingsStore(db_path)
