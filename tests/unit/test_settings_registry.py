import pytest

from config.registry import GENERATOR_KEY, bind_model, get_model, unbind_model
from config.settings import Settings
from telemetry import WebhookConfig


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.DEBOUNCE_MS == 2000
    assert settings.STATUS_RESET_MS == 1000
    assert settings.RAW_PREVIEW_CHARS == 1000
    assert settings.WEBHOOK_URL.endswith("/webhook/code-update")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEBOUNCE_MS", "750")
    monkeypatch.setenv("WEBHOOK_API_KEY", "shared")
    settings = Settings(_env_file=None)
    assert settings.DEBOUNCE_MS == 750
    assert settings.WEBHOOK_API_KEY == "shared"


def test_webhook_config_adds_key_header(monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "WEBHOOK_API_KEY", "shared")
    assert WebhookConfig.from_settings().headers == {"X-API-Key": "shared"}


@pytest.mark.usefixtures("collaborators")
def test_registry_bind_and_retrieve():
    marker = object()
    bind_model(GENERATOR_KEY, lambda **_: marker)
    model = get_model(GENERATOR_KEY)
    assert model() is marker


def test_registry_unbound_key_raises():
    unbind_model("collaborators.unused")
    with pytest.raises(KeyError):
        get_model("collaborators.unused")


def test_bind_defaults_replaces_stub_collaborators(collaborators):
    from api import dependencies
    from config.registry import STORE_KEY

    stub = collaborators(STORE_KEY, object())
    assert dependencies.get_store() is stub
    dependencies.bind_defaults()
    assert dependencies.get_store() is dependencies._default_store
