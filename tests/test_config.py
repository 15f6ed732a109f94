from roi_simulator.config import DEFAULT_REPORT_TITLE, Settings


def test_settings_defaults(monkeypatch):
    for name in ("SCENARIO_LIST_LIMIT", "CORS_ORIGINS", "LOG_LEVEL", "REPORT_TITLE"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.scenario_list_limit == 50
    assert settings.cors_origins == ["*"]
    assert settings.log_level == "INFO"
    assert settings.report_title == DEFAULT_REPORT_TITLE
    assert settings.db_create_all is False


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SCENARIO_LIST_LIMIT", "10")
    monkeypatch.setenv("CORS_ORIGINS", '["https://roi.example.com"]')
    monkeypatch.setenv("DATABASE_URL", "sqlite:////tmp/other.db")
    settings = Settings(_env_file=None)
    assert settings.scenario_list_limit == 10
    assert settings.cors_origins == ["https://roi.example.com"]
    assert settings.database_url == "sqlite:////tmp/other.db"


def test_calculator_constants_are_not_settings():
    fields = set(Settings.model_fields)
    assert not {"bias_factor", "automated_cost_per_invoice", "error_rate_auto"} & fields
