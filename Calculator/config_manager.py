# config_manager.py
import json
import logging
from pathlib import Path

from . import error as E

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
config_json = PROJECT_ROOT / "config.json"
ui_strings = PROJECT_ROOT / "ui_strings.json"

DEFAULT_SETTINGS = {
    "darkmode": True,
    "animated_background": True,
    "ripple_effect": True,
    "shift_to_copy": True,
    "background_fps": 30,
    "debug_logging": False,
}

DEFAULT_DESCRIPTIONS = {
    "darkmode": "Dark mode",
    "animated_background": "Animated background",
    "ripple_effect": "Ripple effect on buttons",
    "shift_to_copy": "Shift + click on the display copies the result",
    "background_fps": "Background frames per second",
    "debug_logging": "Verbose logging",
}

# Inclusive (min, max) for integer settings
INT_RANGES = {
    "background_fps": (1, 120),
}


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s (%s), using defaults", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top level is not an object", path)
        return {}
    return data


def _lookup(values, key_value):
    if key_value == "all":
        return values
    return values.get(key_value)


def load_setting_value(key_value, path=None):
    """Return one setting, or the full settings dict for "all".

    Missing files, missing keys and invalid values fall back to
    DEFAULT_SETTINGS; unknown keys are dropped.
    """
    settings_dict = dict(DEFAULT_SETTINGS)
    for key, value in _read_json(path or config_json).items():
        try:
            settings_dict[key] = validate_setting(key, value)
        except E.ConfigurationError as e:
            logger.warning("Ignoring setting in %s: %s (value %r)", path or config_json, e, e.detail)
    return _lookup(settings_dict, key_value)


def load_setting_description(key_value, path=None):
    descriptions = dict(DEFAULT_DESCRIPTIONS)
    descriptions.update(_read_json(path or ui_strings))
    return _lookup(descriptions, key_value)


def validate_setting(key_value, value):
    """Return the value if it is valid for key_value, raise ConfigurationError otherwise."""
    if key_value not in DEFAULT_SETTINGS:
        raise E.ConfigurationError(E.message_for("5000") + key_value, code="5000", detail=value)

    default = DEFAULT_SETTINGS[key_value]
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise E.ConfigurationError(E.message_for("5001") + key_value, code="5001", detail=value)
        return value

    # bool is a subclass of int, so rule it out explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise E.ConfigurationError(E.message_for("5002") + key_value, code="5002", detail=value)

    low, high = INT_RANGES.get(key_value, (None, None))
    if (low is not None and value < low) or (high is not None and value > high):
        raise E.ConfigurationError(
            E.message_for("5003") + f"{key_value} must be between {low} and {high}",
            code="5003",
            detail=value,
        )
    return value


def save_setting(settings_dict, path=None):
    """Validate every entry, then write the settings. Returns what was written."""
    validated = {key: validate_setting(key, value) for key, value in settings_dict.items()}

    target = Path(path or config_json)
    try:
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(validated, f, indent=4)
    except OSError as e:
        raise E.ConfigurationError(E.message_for("5004"), code="5004", detail=str(e)) from e

    logger.info("Saved %d settings to %s", len(validated), target)
    return validated
