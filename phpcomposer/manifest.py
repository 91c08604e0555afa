"""Reading, editing and writing a project's composer.json."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from phpcomposer.runner import ComposerError

MANIFEST_NAME = "composer.json"


class ComposerJSONNotFoundError(ComposerError, FileNotFoundError):
    """The working directory holds no composer.json."""

    def __init__(self, message: str = "composer.json not found"):
        super().__init__(message)


# (attribute, JSON key, kind) in the order the fields are written out.
_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("name", "name", "str"),
    ("description", "description", "str"),
    ("type", "type", "str"),
    ("keywords", "keywords", "list_str"),
    ("homepage", "homepage", "str"),
    ("license", "license", "any"),
    ("authors", "authors", "list_dict_str"),
    ("support", "support", "dict_str"),
    ("require", "require", "dict_str"),
    ("require_dev", "require-dev", "dict_str"),
    ("suggest", "suggest", "dict_str"),
    ("autoload", "autoload", "dict_any"),
    ("autoload_dev", "autoload-dev", "dict_any"),
    ("repositories", "repositories", "dict_any"),
    ("config", "config", "dict_any"),
    ("scripts", "scripts", "dict_any"),
    ("scripts_descriptions", "scripts-descriptions", "dict_str"),
    ("extra", "extra", "dict_any"),
    ("bin", "bin", "list_str"),
    ("archive", "archive", "dict_any"),
    ("non_feature_branches", "non-feature-branches", "list_str"),
    ("minimum_stability", "minimum-stability", "str"),
    ("prefer_stable", "prefer-stable", "bool"),
    ("replace", "replace", "dict_str"),
    ("conflict", "conflict", "dict_str"),
    ("provide", "provide", "dict_str"),
)


def _check(key: str, kind: str, value: Any) -> Any:
    """Validate a decoded JSON value against the field kind; ``None`` means unset."""
    if value is None or kind == "any":
        return value

    def fail() -> ValueError:
        return ValueError(f"composer.json field {key!r} has an invalid type")

    if kind == "str":
        if not isinstance(value, str):
            raise fail()
    elif kind == "bool":
        if not isinstance(value, bool):
            raise fail()
    elif kind == "list_str":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise fail()
    elif kind == "dict_str":
        if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
            raise fail()
    elif kind == "dict_any":
        if not isinstance(value, dict):
            raise fail()
    elif kind == "list_dict_str":
        if not isinstance(value, list) or not all(
            isinstance(item, dict) and all(isinstance(v, str) for v in item.values())
            for item in value
        ):
            raise fail()
    return value


def _is_empty(kind: str, value: Any) -> bool:
    if value is None:
        return True
    if kind == "any":
        return False
    if kind == "bool":
        return value is False
    return len(value) == 0


def _sorted_maps(value: Any) -> Any:
    """Order the keys of every nested mapping, as the manifest is written."""
    if isinstance(value, dict):
        return {k: _sorted_maps(value[k]) for k in sorted(value)}
    if isinstance(value, list):
        return [_sorted_maps(v) for v in value]
    return value


@dataclass
class ComposerJSON:
    """The fields of composer.json this client understands."""

    name: str = ""
    description: str = ""
    type: str = ""
    keywords: Optional[List[str]] = None
    homepage: str = ""
    license: Any = None
    authors: Optional[List[Dict[str, str]]] = None
    support: Optional[Dict[str, str]] = None
    require: Optional[Dict[str, str]] = None
    require_dev: Optional[Dict[str, str]] = None
    suggest: Optional[Dict[str, str]] = None
    autoload: Optional[Dict[str, Any]] = None
    autoload_dev: Optional[Dict[str, Any]] = None
    repositories: Optional[Dict[str, Any]] = None
    config: Optional[Dict[str, Any]] = None
    scripts: Optional[Dict[str, Any]] = None
    scripts_descriptions: Optional[Dict[str, str]] = None
    extra: Optional[Dict[str, Any]] = None
    bin: Optional[List[str]] = None
    archive: Optional[Dict[str, Any]] = None
    non_feature_branches: Optional[List[str]] = None
    minimum_stability: str = ""
    prefer_stable: bool = False
    replace: Optional[Dict[str, str]] = None
    conflict: Optional[Dict[str, str]] = None
    provide: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComposerJSON":
        """Build from decoded JSON; unknown keys are ignored, wrong types raise ValueError."""
        if not isinstance(data, dict):
            raise ValueError("composer.json must hold a JSON object")
        values: Dict[str, Any] = {}
        for attr, key, kind in _FIELDS:
            if key in data:
                value = _check(key, kind, data[key])
                if value is not None:
                    values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """The JSON object to write, leaving out fields that are empty."""
        result: Dict[str, Any] = {}
        for attr, key, kind in _FIELDS:
            value = getattr(self, attr)
            if not _is_empty(kind, value):
                result[key] = _sorted_maps(value)
        return result


class ManifestMixin:
    """Edits composer.json in the client's working directory."""

    def _manifest_path(self) -> Path:
        work_dir = getattr(self, "working_dir", "") or os.getcwd()
        return Path(work_dir) / MANIFEST_NAME

    def read_composer_json(self) -> ComposerJSON:
        """Read and parse composer.json from the working directory."""
        path = self._manifest_path()
        if not path.exists():
            raise ComposerJSONNotFoundError()
        data = json.loads(path.read_text(encoding="utf-8"))
        return ComposerJSON.from_dict(data)

    def write_composer_json(self, manifest: ComposerJSON) -> None:
        """Write the manifest to composer.json, indented by four spaces."""
        path = self._manifest_path()
        content = json.dumps(manifest.to_dict(), indent=4, ensure_ascii=False)
        path.write_text(content, encoding="utf-8")

    def add_require(self, package_name: str, version: str, is_dev: bool = False) -> None:
        """Add a package constraint to require, or require-dev when ``is_dev``."""
        manifest = self.read_composer_json()
        if is_dev:
            if manifest.require_dev is None:
                manifest.require_dev = {}
            manifest.require_dev[package_name] = version
        else:
            if manifest.require is None:
                manifest.require = {}
            manifest.require[package_name] = version
        self.write_composer_json(manifest)

    def remove_require(self, package_name: str, is_dev: bool = False) -> None:
        """Drop a package from require, or require-dev when ``is_dev``."""
        manifest = self.read_composer_json()
        target = manifest.require_dev if is_dev else manifest.require
        if target is not None:
            target.pop(package_name, None)
        self.write_composer_json(manifest)

    def add_script(self, name: str, script: Any, description: str = "") -> None:
        """Add a script, with its description when one is given."""
        manifest = self.read_composer_json()
        if manifest.scripts is None:
            manifest.scripts = {}
        manifest.scripts[name] = list(script) if isinstance(script, tuple) else script
        if description:
            if manifest.scripts_descriptions is None:
                manifest.scripts_descriptions = {}
            manifest.scripts_descriptions[name] = description
        self.write_composer_json(manifest)

    def remove_script(self, name: str) -> None:
        """Remove a script and its description."""
        manifest = self.read_composer_json()
        if manifest.scripts is not None:
            manifest.scripts.pop(name, None)
        if manifest.scripts_descriptions is not None:
            manifest.scripts_descriptions.pop(name, None)
        self.write_composer_json(manifest)

    def add_autoload(self, kind: str, namespace: str, paths: Any, is_dev: bool = False) -> None:
        """Map a namespace to paths under an autoload kind such as ``psr-4``."""
        manifest = self.read_composer_json()
        if is_dev:
            if manifest.autoload_dev is None:
                manifest.autoload_dev = {}
            autoload = manifest.autoload_dev
        else:
            if manifest.autoload is None:
                manifest.autoload = {}
            autoload = manifest.autoload

        if autoload.get(kind) is None:
            autoload[kind] = {}
        section = autoload[kind]
        if not isinstance(section, dict):
            raise ComposerError("invalid autoload configuration")
        section[namespace] = list(paths) if isinstance(paths, tuple) else paths
        self.write_composer_json(manifest)

    def set_config(self, key: str, value: Any) -> None:
        """Set an entry in the config section."""
        manifest = self.read_composer_json()
        if manifest.config is None:
            manifest.config = {}
        manifest.config[key] = value
        self.write_composer_json(manifest)

    def get_config(self, key: str) -> Any:
        """Return an entry of the config section, or None when it is absent."""
        manifest = self.read_composer_json()
        if manifest.config is None:
            return None
        return manifest.config.get(key)

    def set_property(self, prop: str, value: Any) -> None:
        """Set a top-level property; a value of the wrong type is ignored.

        Supported: name, description, type, keywords, homepage, license,
        minimum-stability and prefer-stable. Anything else raises ValueError.
        """
        manifest = self.read_composer_json()
        string_props = {
            "name": "name",
            "description": "description",
            "type": "type",
            "homepage": "homepage",
            "minimum-stability": "minimum_stability",
        }
        if prop in string_props:
            if isinstance(value, str):
                setattr(manifest, string_props[prop], value)
        elif prop == "keywords":
            if _is_string_sequence(value):
                manifest.keywords = list(value)
        elif prop == "license":
            manifest.license = value
        elif prop == "prefer-stable":
            if isinstance(value, bool):
                manifest.prefer_stable = value
        else:
            raise ValueError("unsupported property")
        self.write_composer_json(manifest)


def _is_string_sequence(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and all(isinstance(item, str) for item in value)
    )


__all__: Sequence[str] = ("ComposerJSONNotFoundError", "ComposerJSON", "ManifestMixin")