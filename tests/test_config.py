from wearsearch_client.core.config import Settings, get_settings


def test_settings_expose_only_used_fields():
    fields = set(Settings.model_fields)
    assert {"API_BASE_URL", "API_LEGACY_BASE_URL", "ENABLE_LEGACY_FALLBACK", "DEFAULT_LANGUAGE"} <= fields
    assert "TEST_MODE" not in fields
    assert not hasattr(Settings, "is_production")


def test_allowed_origins_list(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, ,http://b.test")
    assert Settings().allowed_origins_list == ["http://a.test", "http://b.test"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
