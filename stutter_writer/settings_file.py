"""JSON settings file: load, save, and dict conversion.

WHY: Users keep their preferred preset and custom probabilities between
runs. A small JSON document is easy to hand-edit, and validating it against
a schema turns typos ("hevy", "0.3" as a string) into a clear message
instead of odd stutter behaviour.

HOW: settings_from_dict() validates the document with jsonschema against
schemas/stutter_settings.schema.json and builds a StutterSettings, filling
missing keys from the dataclass defaults. settings_to_dict() is the inverse.
load_settings()/save_settings() add UTF-8 file I/O.

RULES:
- Keys are the StutterSettings field names; enums are stored by lowercase
  name ("medium", "hard").
- All keys are optional; unknown keys are rejected.
- Only types are validated; out-of-range numbers are accepted and clamped
  later by the resolver.
- Invalid documents raise ValueError (wrapping the schema error).
- FileNotFoundError propagates from load_settings().
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from stutter_writer.core.settings import StrengthPreset, StutterMode, StutterSettings

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "stutter_settings.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the settings JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def settings_from_dict(data: Dict[str, Any]) -> StutterSettings:
    """Build StutterSettings from a parsed JSON document.

    Raises:
        ValueError: If the document does not match the settings schema.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ValueError(
            "Invalid settings at {}: {}".format(location, exc.message)
        ) from exc

    settings = StutterSettings()
    for f in fields(StutterSettings):
        if f.name not in data:
            continue
        value = data[f.name]
        if f.name == "strength_preset":
            value = StrengthPreset[value.upper()]
        elif f.name == "mode":
            value = StutterMode[value.upper()]
        elif isinstance(getattr(settings, f.name), bool):
            value = bool(value)
        elif isinstance(getattr(settings, f.name), int):
            value = int(value)
        else:
            value = float(value)
        setattr(settings, f.name, value)
    return settings


def settings_to_dict(settings: StutterSettings) -> Dict[str, Any]:
    """Serialize StutterSettings to a JSON-ready dict."""
    data: Dict[str, Any] = {}
    for f in fields(StutterSettings):
        value = getattr(settings, f.name)
        if f.name == "strength_preset":
            value = StrengthPreset(value).name.lower()
        elif f.name == "mode":
            value = StutterMode(value).name.lower()
        data[f.name] = value
    return data


def load_settings(path: str | Path) -> StutterSettings:
    """Read and validate a settings file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or fails validation.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("Settings file {} is not valid JSON: {}".format(path, exc)) from exc
    return settings_from_dict(data)


def save_settings(settings: StutterSettings, path: str | Path) -> Path:
    """Write settings as pretty-printed JSON and return the path."""
    out = Path(path)
    out.write_text(json.dumps(settings_to_dict(settings), indent=2) + "\n", encoding="utf-8")
    return out
