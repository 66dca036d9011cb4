from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence, TypedDict, Required, TypeAlias, TypeVar

import platformdirs

from mcansi._loop import loop_last

log = logging.getLogger(__name__)


class SchemaDict(TypedDict, total=False):
    """Typing for schema data structure."""

    key: Required[str]
    title: Required[str]
    type: Required[str]
    help: str
    default: object
    fields: list[SchemaDict]


SettingsType: TypeAlias = dict[str, object]

ExpectType = TypeVar("ExpectType")


INPUT_TYPES: dict[str, tuple[type, ...]] = {
    "boolean": (bool,),
    "integer": (int,),
    "string": (str,),
}


class SettingsError(Exception):
    """Base class for settings related errors."""


class InvalidKey(SettingsError):
    """The key is not in the schema."""


class InvalidValue(SettingsError):
    """The value was not of the expected type."""


def parse_key(key: str) -> Sequence[str]:
    return key.split(".")


def get_setting(
    settings: dict[str, object], key: str, expect_type: type[ExpectType] = object
) -> ExpectType:
    """Get a key from a settings structure.

    Args:
        settings: A settings dictionary.
        key: A dot delimited key, e.g. "transcode.legacy"
        expect_type: The expected type of the value.

    Raises:
        InvalidValue: If the value is not the expected type.
        KeyError: If the key doesn't exist in settings.

    Returns:
        The value matching they key.
    """
    for last, key_component in loop_last(parse_key(key)):
        if last:
            result = settings[key_component]
            if not isinstance(result, expect_type):
                raise InvalidValue(
                    f"Expected {expect_type.__name__} type; found {result!r}"
                )
            return result
        else:
            sub_settings = settings[key_component]
            if not isinstance(sub_settings, dict):
                raise KeyError(key)
            settings = sub_settings
    raise KeyError(key)


def check_type(schema: SchemaDict, value: object) -> bool:
    """Check a value matches the type in a schema."""
    expected = INPUT_TYPES.get(schema["type"])
    if expected is None:
        return False
    if isinstance(value, bool) and bool not in expected:
        return False
    return isinstance(value, expected)


class Schema:
    def __init__(self, schema: list[SchemaDict]) -> None:
        self.schema = schema

    def get_schema(self, key: str) -> SchemaDict:
        """Get the schema for a dot delimited key.

        Raises:
            InvalidKey: If the key is not in the schema.
        """
        fields = self.schema
        for last, key_component in loop_last(parse_key(key)):
            for sub_schema in fields:
                if sub_schema["key"] == key_component:
                    break
            else:
                raise InvalidKey(key)
            if last:
                return sub_schema
            fields = sub_schema.get("fields", [])
        raise InvalidKey(key)

    def set_value(self, settings: SettingsType, key: str, value: object) -> None:
        """Set a value, creating intermediate objects as required.

        Raises:
            InvalidKey: If the key is not in the schema.
            InvalidValue: If the value is not the type in the schema.
        """
        schema = self.get_schema(key)
        if not check_type(schema, value):
            raise InvalidValue(f"Expected {schema['type']} for {key!r}; found {value!r}")
        for last, key_component in loop_last(parse_key(key)):
            if last:
                settings[key_component] = value
            else:
                sub_settings = settings.setdefault(key_component, {})
                assert isinstance(sub_settings, dict)
                settings = sub_settings

    def build_default(self) -> SettingsType:
        settings: SettingsType = {}

        def set_defaults(schema: list[SchemaDict], settings: SettingsType) -> None:
            for sub_schema in schema:
                key = sub_schema["key"]
                type = sub_schema["type"]
                if type in INPUT_TYPES:
                    if (default := sub_schema.get("default")) is not None:
                        settings[key] = default
                elif type == "object":
                    if fields := sub_schema.get("fields"):
                        sub_settings = settings[key] = {}
                        set_defaults(fields, sub_settings)

        set_defaults(self.schema, settings)
        return settings

    def merge(self, settings: SettingsType) -> SettingsType:
        """Apply settings over the defaults, validating each value.

        Args:
            settings: Settings, possibly incomplete.

        Raises:
            InvalidKey: If a key is not in the schema.
            InvalidValue: If a value is not the type in the schema.

        Returns:
            Complete settings.
        """
        merged = self.build_default()

        def apply(prefix: str, values: dict[str, object]) -> None:
            for key, value in values.items():
                full_key = f"{prefix}{key}"
                if isinstance(value, dict):
                    apply(f"{full_key}.", value)
                else:
                    self.set_value(merged, full_key, value)

        apply("", settings)
        return merged


class Settings:
    """Stores schema backed settings."""

    def __init__(self, schema: Schema, settings: SettingsType) -> None:
        self._schema = schema
        self._settings = settings

    def get(
        self, key: str, expect_type: type[ExpectType] = object
    ) -> ExpectType:
        from os.path import expandvars

        setting = get_setting(self._settings, key, expect_type=expect_type)
        if isinstance(setting, str):
            setting = expandvars(setting)
        return setting

    def set(self, key: str, value: object) -> None:
        self._schema.set_value(self._settings, key, value)


def get_config_path() -> Path:
    """Get the default settings path."""
    config_path = Path(platformdirs.user_config_dir("mcansi", ensure_exists=True))
    return config_path / "settings.json"


def load_settings(schema: Schema, settings_path: Path | None = None) -> Settings:
    """Load settings, writing the defaults if the file doesn't exist.

    Args:
        schema: Settings schema.
        settings_path: Path to settings JSON, or `None` for the user config directory.

    Raises:
        SettingsError: If the settings file is invalid.

    Returns:
        Settings instance.
    """
    if settings_path is None:
        settings_path = get_config_path()
    if settings_path.exists():
        try:
            data = json.loads(settings_path.read_text("utf-8"))
        except json.JSONDecodeError as error:
            raise SettingsError(f"Unable to read {settings_path}; {error}") from None
        if not isinstance(data, dict):
            raise SettingsError(f"Expected an object in {settings_path}")
        settings = schema.merge(data)
    else:
        settings = schema.build_default()
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(settings, indent=4), "utf-8")
        log.info("Wrote default settings to %s", settings_path)
    return Settings(schema, settings)
