"""Basic smoke tests for the service packages."""

def test_imports():
    import api_server  # noqa: F401
    import report_synthesis  # noqa: F401
    import telemetry  # noqa: F401
    from config.settings import settings

    assert settings.LLM_CONFIG_PATH.endswith(".json")
