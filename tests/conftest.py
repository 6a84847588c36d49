from __future__ import annotations

import pytest

from sgmail.domain import Destination, Mail
from sgmail.infrastructure import settings as settings_module
from sgmail.infrastructure.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "SENDGRID_API_KEY",
        "SENDGRID_API_URL",
        "SENDGRID_REQUEST_TIMEOUT_SECONDS",
        "SENDGRID_INCLUDE_FROM_NAME",
        "SENDGRID_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="SG.test-key", _env_file=None)


@pytest.fixture
def basic_mail() -> Mail:
    return Mail.create(
        Destination("a@x.com", "A"),
        "Test",
        Destination("b@x.com", "B"),
    ).set_text("It works")
