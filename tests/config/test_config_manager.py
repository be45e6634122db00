import pytest

from elements_inspector.config import ConfigManager


@pytest.fixture
def user_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("ELEMENTS_INSPECTOR_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset()
    yield tmp_path
    ConfigManager.reset()


def test_packaged_defaults(user_config_dir):
    cfg = ConfigManager()

    assert cfg.get("alternate_row_color") is True
    assert cfg.get("row_height") == 23
    assert cfg.get("expand_depth") == 2
    assert cfg.get("unknown", "fallback") == "fallback"
    assert cfg.get_logging_config()["version"] == 1


def test_singleton(user_config_dir):
    assert ConfigManager() is ConfigManager()


def test_user_overrides_are_merged(user_config_dir):
    (user_config_dir / "inspector.yml").write_text("alternate_row_color: false\nrow_height: 30\n", encoding="utf-8")

    cfg = ConfigManager()

    assert cfg.get("alternate_row_color") is False
    assert cfg.get("row_height") == 30
    assert cfg.get("indent_width") == 12


def test_invalid_user_file_is_ignored(user_config_dir, caplog):
    (user_config_dir / "inspector.yml").write_text("row_height: [unclosed\n", encoding="utf-8")
    (user_config_dir / "logging.yml").write_text("- just\n- a list\n", encoding="utf-8")

    cfg = ConfigManager()

    assert cfg.get("row_height") == 23
    assert cfg.get_logging_config()["version"] == 1
    assert any("Could not parse config" in r.getMessage() for r in caplog.records)
    assert any("not a mapping" in r.getMessage() for r in caplog.records)


def test_reset_reloads(user_config_dir):
    first = ConfigManager()
    (user_config_dir / "inspector.yml").write_text("row_height: 40\n", encoding="utf-8")
    assert first.get("row_height") == 23

    ConfigManager.reset()

    assert ConfigManager().get("row_height") == 40
