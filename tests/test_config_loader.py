import pytest
import json

import config_loader
import constants


def test_load_config_defaults_when_default_file_missing(tmp_path, monkeypatch):
    """No config.json in the working directory means built-in defaults."""
    monkeypatch.chdir(tmp_path)
    config = config_loader.load_config()
    assert config == config_loader.default_config()
    assert config['archive_root'] == constants.DEFAULT_ARCHIVE_ROOT
    assert config['request_timeout_seconds'] == constants.DEFAULT_TIMEOUT_SECONDS
    assert config['default_max_pages'] == constants.DEFAULT_MAX_PAGES


def test_load_config_reads_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / constants.DEFAULT_CONFIG_FILE).write_text(json.dumps({"archive_root": "snapshots"}))
    assert config_loader.load_config()['archive_root'] == "snapshots"


def test_load_config_valid(tmp_path):
    """Tests loading a valid configuration file with every key set."""
    valid_config_data = {
        "archive_root": "out",
        "user_agent": "TestAgent/1.0",
        "request_timeout_seconds": 2.5,
        "max_asset_workers": 2,
        "default_max_pages": 25,
        "log_file": "logs/archiver.log",
        "log_level": "debug",
    }
    config_file = tmp_path / "valid_config.json"
    config_file.write_text(json.dumps(valid_config_data))

    loaded_config = config_loader.load_config(str(config_file))

    for key, value in valid_config_data.items():
        if key != 'log_level':
            assert loaded_config[key] == value
    assert loaded_config['log_level'] == "DEBUG" # Normalized to upper case


def test_load_config_partial_file_gets_defaults(tmp_path):
    config_file = tmp_path / "partial.json"
    config_file.write_text(json.dumps({"default_max_pages": 3}))

    loaded_config = config_loader.load_config(str(config_file))

    assert loaded_config['default_max_pages'] == 3
    assert loaded_config['user_agent'] == constants.DEFAULT_USER_AGENT
    assert loaded_config['max_asset_workers'] == constants.DEFAULT_MAX_ASSET_WORKERS


def test_load_config_explicit_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        config_loader.load_config(str(tmp_path / "missing.json"))


def test_load_config_invalid_json(tmp_path):
    config_file = tmp_path / "invalid.json"
    config_file.write_text("{invalid json")
    with pytest.raises(ValueError, match="Error decoding JSON"):
        config_loader.load_config(str(config_file))


def test_load_config_not_an_object(tmp_path):
    config_file = tmp_path / "list.json"
    config_file.write_text("[]")
    with pytest.raises(ValueError, match="must contain a JSON object"):
        config_loader.load_config(str(config_file))


def test_load_config_unknown_keys(tmp_path):
    config_file = tmp_path / "unknown.json"
    config_file.write_text(json.dumps({"max_retries": 3, "archive_root": "a"}))
    with pytest.raises(ValueError, match="unknown keys: max_retries"):
        config_loader.load_config(str(config_file))


@pytest.mark.parametrize("key, value, message", [
    ("archive_root", "", "archive_root"),
    ("user_agent", 42, "user_agent"),
    ("request_timeout_seconds", 0, "request_timeout_seconds"),
    ("request_timeout_seconds", "15", "request_timeout_seconds"),
    ("request_timeout_seconds", True, "request_timeout_seconds"),
    ("max_asset_workers", 0, "max_asset_workers"),
    ("default_max_pages", 1.5, "default_max_pages"),
    ("log_file", "  ", "log_file"),
    ("log_level", "VERBOSE", "log_level"),
])
def test_load_config_invalid_values(tmp_path, key, value, message):
    config_file = tmp_path / "bad_value.json"
    config_file.write_text(json.dumps({key: value}))
    with pytest.raises(ValueError, match=message):
        config_loader.load_config(str(config_file))
