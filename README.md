# phpcomposer

A Python library for driving Composer, the PHP dependency manager. It runs
the `composer` executable, returns what the executable printed as a string
or as parsed objects, and raises exceptions when a command fails. It can also
read and edit a project's `composer.json` directly, without starting Composer.

## Installation

```
pip install phpcomposer
```

Composer must already be installed. If you do not give a path, the library
looks for `composer` and then `composer.phar` on your `PATH`.

## Putting a client together

The library is a core class plus one mixin for each group of commands.
To build a client, combine the mixins you need with `ComposerBase`, which
goes last:

```python
from phpcomposer.runner import ComposerBase, Options, default_options
from phpcomposer.manifest import ManifestMixin
from phpcomposer.dependencies import DependenciesMixin
from phpcomposer.archive import ArchiveMixin
from phpcomposer.licenses import LicensesMixin
from phpcomposer.audit import AuditMixin
from phpcomposer.fund import FundMixin
from phpcomposer.config import ConfigMixin


class Composer(
    ManifestMixin,
    DependenciesMixin,
    ArchiveMixin,
    LicensesMixin,
    AuditMixin,
    FundMixin,
    ConfigMixin,
    ComposerBase,
):
    pass


composer = Composer(default_options())
print(composer.run("--version"))
```

### Options

`Options` is a dataclass with these fields:

- `executable_path`: path to Composer. When empty, a `detector` callable is
  used if you gave one, otherwise `PATH` is searched. If detection raises
  `ComposerNotFoundError`, `auto_install` is true and an `installer` callable
  is given, the installer runs and detection is tried once more.
- `verify_executable` (default `True`): when a path is given, check that it
  exists. If it does not, `ComposerNotFoundError` is raised.
- `working_dir`: the directory the commands run in. When empty, the current
  directory is used.
- `env`: a mapping that replaces the environment of the child process.
- `default_timeout`: in seconds, 600 by default.
- `runner`: the callable that executes commands. The default is
  `SubprocessRunner`.

`default_options()` returns an empty working directory, `auto_install=True`
and the ten-minute timeout.

### Running commands

- `run(*args)` runs a command with the default timeout.
- `run_with_timeout(timeout, *args)` runs a command with the given timeout.
- `is_installed()` returns true when an executable path is known.

Both `run` and `run_with_timeout` return stdout and stderr combined. A
non-zero exit status, a timeout or a failure to start raises
`CommandExecutionError`. This class is a subclass of `ComposerError`. Its
message includes the output, and it has the attributes `output` and
`returncode`.

```python
from phpcomposer.runner import CommandExecutionError

try:
    composer.validate_composer_json(strict=True, with_dependencies=False)
except CommandExecutionError as exc:
    print("composer.json is not valid:", exc.output)
```

Many methods accept an `options` mapping. It is turned into flags by
`build_option_flags`: `{"format": "json", "no-dev": ""}` becomes
`["--format=json", "--no-dev"]`.

## Commands by mixin

- `DependenciesMixin`: `install`, `install_with_options`, `update`,
  `update_with_options`, `dump_autoload`, `dump_autoload_with_options`,
  `check_dependencies`, `suggests`, `fund_packages`, `run_audit`.
- `ArchiveMixin`: `archive`, `archive_with_format`, `archive_with_options`,
  `archive_package`, `archive_package_with_options`.
- `LicensesMixin`: `licenses`, `licenses_with_format`,
  `licenses_with_options`, `check_licenses`.
- `AuditMixin`: `audit`, `audit_with_json`, `audit_without_dev`,
  `audit_with_format`, `audit_with_options`, `audit_lock`,
  `has_vulnerabilities`, `get_high_severity_vulnerabilities`,
  `get_abandoned_packages`.
  - `audit_with_json` returns an `AuditResult` that holds a list of
    `Vulnerability` entries.
  - `has_vulnerabilities` returns true when the report lists any finding, or
    when a failed audit says it found vulnerabilities.
- `FundMixin`: `fund`, `fund_with_json`, `fund_with_package`,
  `get_funding_urls`, `has_funding`, `fund_with_options`.
  - `fund_with_json` returns a list of `FundingInfo`.
- `ConfigMixin`: `validate`, `validate_composer_json`, `get_composer_home`,
  `clear_cache`, `get_config_with_global`, `set_config_with_global`,
  `check_platform_reqs`.

```python
composer.install(no_dev=True, optimize=True)
composer.update(["monolog/monolog"], no_dev=False)

for vuln in composer.get_high_severity_vulnerabilities():
    print(vuln.package, vuln.version, vuln.severity, vuln.title)

print(composer.get_funding_urls())
```

## Editing composer.json

`ManifestMixin` reads and writes `composer.json` in the working directory.
The file is parsed into a `ComposerJSON` dataclass. When it is written back:

- it is indented by four spaces;
- empty fields are left out;
- the keys of nested objects are sorted.

```python
manifest = composer.read_composer_json()
print(manifest.name, (manifest.require or {}).get("php"))

composer.add_require("symfony/console", "^6.0", is_dev=False)
composer.remove_require("phpunit/phpunit", is_dev=True)
composer.add_script("test", ["phpunit"], "Run the test suite")
composer.add_autoload("psr-4", "App\\", "src/", is_dev=False)
composer.set_config("process-timeout", 600)
print(composer.get_config("process-timeout"))
composer.set_property("minimum-stability", "stable")
```

Errors:

- If there is no `composer.json`, `ComposerJSONNotFoundError` is raised.
- If a field has the wrong JSON type, `ValueError` is raised.
- `set_property` accepts `name`, `description`, `type`, `keywords`,
  `homepage`, `license`, `minimum-stability` and `prefer-stable`. Any other
  name raises `ValueError`. A value of the wrong type is ignored.

## Testing without Composer

Pass a `ScriptedRunner` as `Options.runner`. It answers with canned output.
A command is looked up first by all its arguments joined with spaces, then by
its first argument alone. Commands without an entry go to a fallback runner,
which is a `SubprocessRunner` by default. If the error given to `add` is a
string, `CommandExecutionError` is raised with that message. If it is an
exception, that exception is raised.

```python
from phpcomposer.runner import ScriptedRunner

runner = ScriptedRunner()
runner.add("--version", "Composer version 2.5.0 2023-01-01 12:00:00")
runner.add("audit --format=json", '{"vulnerabilities": [], "found": 0}')
fake = Composer(Options(executable_path="/path/to/composer", runner=runner))
assert fake.has_vulnerabilities() is False
```

## What this library does not do

There is no command-line program; the package is used only as a library.
There is no ready-made client class; you combine the mixins as shown above.
The library has no dedicated methods for these tasks:

- adding, removing, showing, searching or bumping packages;
- global installs;
- running vendor binaries;
- shell completion;
- platform and extension checks;
- `status` and `diagnose`;
- `auth.json` credentials;
- Composer environment variables.

You can still run any of these Composer commands yourself with `run`.