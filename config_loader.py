# Module for loading and validating configuration
import json
import os
import constants # Import constants


def default_config():
    """Returns a fresh configuration dictionary populated with defaults."""
    return {
        'archive_root': constants.DEFAULT_ARCHIVE_ROOT,
        'user_agent': constants.DEFAULT_USER_AGENT,
        'request_timeout_seconds': constants.DEFAULT_TIMEOUT_SECONDS,
        'max_asset_workers': constants.DEFAULT_MAX_ASSET_WORKERS,
        'default_max_pages': constants.DEFAULT_MAX_PAGES,
        'log_file': constants.DEFAULT_LOG_FILE,
        'log_level': constants.DEFAULT_LOG_LEVEL,
    }


def load_config(config_path=None):
    """
    Loads configuration from a JSON file, validates, and sets defaults.

    When no path is given the default config file is used if it exists,
    otherwise the built-in defaults are returned. An explicitly named file
    that does not exist raises FileNotFoundError.
    """
    explicit = config_path is not None
    config_path = config_path or constants.DEFAULT_CONFIG_FILE

    if not explicit and not os.path.exists(config_path):
        return _validate(default_config())

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file '{config_path}' must contain a JSON object.")

        unknown_keys = [key for key in loaded if key not in default_config()]
        if unknown_keys:
            raise ValueError(f"Config file '{config_path}' contains unknown keys: {', '.join(sorted(unknown_keys))}")

        # --- Set Defaults for Optional Keys ---
        config = default_config()
        config.update(loaded)
        return _validate(config)

    except FileNotFoundError:
        raise # Re-raise the FileNotFoundError
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from config file '{config_path}': {e}") from e
    except ValueError:
        raise # Re-raise the ValueError
    except Exception as e: # Catch any other unexpected errors during loading/validation
        raise RuntimeError(f"An unexpected error occurred loading configuration from '{config_path}': {e}") from e


def _validate(config):
    """Validates value types and ranges. Returns the config unchanged."""
    if not isinstance(config['archive_root'], str) or not config['archive_root'].strip():
        raise ValueError("Config 'archive_root' must be a non-empty string.")
    if not isinstance(config['user_agent'], str) or not config['user_agent'].strip():
        raise ValueError("Config 'user_agent' must be a non-empty string.")
    timeout = config['request_timeout_seconds']
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError("Config 'request_timeout_seconds' must be a positive number.")
    for key in ('max_asset_workers', 'default_max_pages'):
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"Config '{key}' must be a positive integer.")
    if not isinstance(config['log_file'], str) or not config['log_file'].strip():
        raise ValueError("Config 'log_file' must be a non-empty string.")
    level = config['log_level']
    if not isinstance(level, str) or level.upper() not in constants.VALID_LOG_LEVELS:
        raise ValueError(f"Config 'log_level' must be one of: {', '.join(constants.VALID_LOG_LEVELS)}.")
    config['log_level'] = level.upper()
    return config
