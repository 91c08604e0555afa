import json

import pytest

from phpcomposer.manifest import ComposerJSON, ComposerJSONNotFoundError, ManifestMixin
from phpcomposer.runner import ComposerBase, ComposerError, Options

SAMPLE = """{
    "name": "example/project",
    "description": "A sample project",
    "type": "project",
    "license": "MIT",
    "authors": [
        {"name": "Your Name", "email": "your.email@example.com"}
    ],
    "minimum-stability": "stable",
    "require": {"php": ">=7.4"},
    "unknown-key": 42
}"""


class _Client(ManifestMixin, ComposerBase):
    pass


def _client(directory):
    return _Client(
        Options(
            executable_path="/path/to/composer",
            working_dir=str(directory),
            verify_executable=False,
        )
    )


@pytest.fixture
def project(tmp_path):
    (tmp_path / "composer.json").write_text(SAMPLE, encoding="utf-8")
    return tmp_path


def _load(directory):
    return json.loads((directory / "composer.json").read_text(encoding="utf-8"))


def test_read_missing_manifest_raises(tmp_path):
    with pytest.raises(ComposerJSONNotFoundError):
        _client(tmp_path).read_composer_json()


def test_read_parses_fields(project):
    manifest = _client(project).read_composer_json()
    assert manifest.name == "example/project"
    assert manifest.type == "project"
    assert manifest.license == "MIT"
    assert manifest.require == {"php": ">=7.4"}
    assert manifest.minimum_stability == "stable"
    assert manifest.authors == [{"name": "Your Name", "email": "your.email@example.com"}]


def test_read_uses_current_directory_when_unset(project, monkeypatch):
    monkeypatch.chdir(project)
    manifest = _client("").read_composer_json()
    assert manifest.description == "A sample project"


def test_read_invalid_json_raises(tmp_path):
    (tmp_path / "composer.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        _client(tmp_path).read_composer_json()


def test_from_dict_rejects_wrong_types():
    with pytest.raises(ValueError):
        ComposerJSON.from_dict({"name": 5})
    with pytest.raises(ValueError):
        ComposerJSON.from_dict({"require": {"php": 7}})


def test_unknown_keys_are_dropped_and_empty_fields_omitted(project):
    client = _client(project)
    client.write_composer_json(client.read_composer_json())
    data = _load(project)
    assert "unknown-key" not in data
    assert "prefer-stable" not in data
    assert "keywords" not in data
    assert data["require"] == {"php": ">=7.4"}


def test_round_trip_through_file(tmp_path):
    client = _client(tmp_path)
    manifest = ComposerJSON(
        name="vendor/pkg",
        keywords=["a", "b"],
        require={"php": ">=8.1"},
        prefer_stable=True,
        extra={"branch-alias": {"dev-main": "1.x-dev"}},
    )
    client.write_composer_json(manifest)
    assert client.read_composer_json() == manifest


def test_written_file_indents_by_four_spaces_in_field_order(tmp_path):
    client = _client(tmp_path)
    client.write_composer_json(ComposerJSON(name="vendor/pkg", description="d"))
    text = (tmp_path / "composer.json").read_text(encoding="utf-8")
    assert text.startswith('{\n    "name": "vendor/pkg",\n    "description": "d"')


def test_nested_map_keys_are_sorted(tmp_path):
    client = _client(tmp_path)
    client.write_composer_json(ComposerJSON(config={"b-key": 1, "a-key": 2}))
    text = (tmp_path / "composer.json").read_text(encoding="utf-8")
    assert text.index('"a-key"') < text.index('"b-key"')


def test_add_and_remove_require(project):
    client = _client(project)
    client.add_require("symfony/console", "^5.0", False)
    client.add_require("phpunit/phpunit", "^9.0", True)
    data = _load(project)
    assert data["require"]["symfony/console"] == "^5.0"
    assert data["require-dev"] == {"phpunit/phpunit": "^9.0"}

    client.remove_require("symfony/console", False)
    client.remove_require("phpunit/phpunit", True)
    data = _load(project)
    assert "symfony/console" not in data["require"]
    assert "require-dev" not in data


def test_add_and_remove_script(project):
    client = _client(project)
    client.add_script("test", ["phpunit", "phpstan"], "run tests")
    client.add_script("hello", "echo hi", "")
    data = _load(project)
    assert data["scripts"] == {"hello": "echo hi", "test": ["phpunit", "phpstan"]}
    assert data["scripts-descriptions"] == {"test": "run tests"}

    client.remove_script("test")
    data = _load(project)
    assert data["scripts"] == {"hello": "echo hi"}
    assert "scripts-descriptions" not in data


def test_add_autoload(project):
    client = _client(project)
    client.add_autoload("psr-4", "App\\", "src/", False)
    client.add_autoload("psr-4", "Tests\\", ["tests/", "test-framework/"], True)
    manifest = client.read_composer_json()
    assert manifest.autoload == {"psr-4": {"App\\": "src/"}}
    assert manifest.autoload_dev == {"psr-4": {"Tests\\": ["tests/", "test-framework/"]}}


def test_add_autoload_rejects_non_mapping_section(tmp_path):
    (tmp_path / "composer.json").write_text(
        json.dumps({"autoload": {"files": ["a.php"]}}), encoding="utf-8"
    )
    with pytest.raises(ComposerError):
        _client(tmp_path).add_autoload("files", "x", "b.php", False)


def test_set_and_get_config(project):
    client = _client(project)
    assert client.get_config("process-timeout") is None
    client.set_config("process-timeout", 500)
    client.set_config("disable-plugins", True)
    assert client.get_config("process-timeout") == 500
    assert client.get_config("disable-plugins") is True
    assert client.get_config("vendor-dir") is None


def test_set_property_supported_values(project):
    client = _client(project)
    client.set_property("name", "myvendor/mypackage")
    client.set_property("keywords", ["php", "library"])
    client.set_property("license", ["MIT", "GPL-2.0"])
    client.set_property("prefer-stable", True)
    client.set_property("minimum-stability", "dev")
    manifest = client.read_composer_json()
    assert manifest.name == "myvendor/mypackage"
    assert manifest.keywords == ["php", "library"]
    assert manifest.license == ["MIT", "GPL-2.0"]
    assert manifest.prefer_stable is True
    assert manifest.minimum_stability == "dev"


def test_set_property_ignores_wrong_type(project):
    client = _client(project)
    client.set_property("name", 123)
    client.set_property("prefer-stable", "yes")
    manifest = client.read_composer_json()
    assert manifest.name == "example/project"
    assert manifest.prefer_stable is False


def test_set_property_unsupported_raises(project):
    with pytest.raises(ValueError, match="unsupported property"):
        _client(project).set_property("version", "1.0.0")


def test_editing_missing_manifest_raises(tmp_path):
    with pytest.raises(ComposerJSONNotFoundError):
        _client(tmp_path).add_require("vendor/package", "^1.0", False)