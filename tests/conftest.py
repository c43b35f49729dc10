import pytest

from groupsettings.config import StoreConfig, reset_config
from groupsettings.utils.logging import context as log_context
from factories import KeyFileFactory


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in (
        "GROUPSETTINGS_ENCODING",
        "GROUPSETTINGS_FSYNC_ON_SAVE",
        "GROUPSETTINGS_SPACE_AROUND_DELIMITER",
        "GROUPSETTINGS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def fresh_log_context():
    correlation_token = log_context._correlation_id.set(None)
    operation_token = log_context._operation_context.set(None)
    yield
    log_context._operation_context.reset(operation_token)
    log_context._correlation_id.reset(correlation_token)


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(fsync_on_save=False)


@pytest.fixture
def scanner_file(tmp_path):
    return KeyFileFactory.scanner(tmp_path)


@pytest.fixture
def empty_group_file(tmp_path):
    return KeyFileFactory.write(tmp_path, "[scanner]\n\n[reporting]\nformat=xml\n")
