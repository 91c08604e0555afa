import pytest

from phpcomposer.config import ConfigMixin
from phpcomposer.runner import CommandExecutionError, ComposerBase, Options


class _Recorder:
    def __init__(self, output="", error=None):
        self.calls = []
        self.output = output
        self.error = error

    def __call__(self, executable, args, cwd, env, timeout):
        self.calls.append(list(args))
        if self.error is not None:
            raise CommandExecutionError(self.error, self.output)
        return self.output


class _Client(ComposerBase, ConfigMixin):
    pass


def _client(recorder):
    return _Client(
        Options(executable_path="/path/to/composer", verify_executable=False, runner=recorder)
    )


def test_validate_runs_validate():
    recorder = _Recorder("./composer.json is valid")
    _client(recorder).validate()
    assert recorder.calls == [["validate"]]


def test_validate_failure_raises():
    recorder = _Recorder("", "composer.json is invalid")
    with pytest.raises(CommandExecutionError):
        _client(recorder).validate()


def test_get_composer_home_strips_output():
    recorder = _Recorder("  /home/user/.composer\n")
    assert _client(recorder).get_composer_home() == "/home/user/.composer"
    assert recorder.calls == [["config", "--global", "home"]]


def test_get_composer_home_error():
    recorder = _Recorder("", "config failed")
    with pytest.raises(CommandExecutionError):
        _client(recorder).get_composer_home()


def test_clear_cache():
    recorder = _Recorder("Cache directory does not exist")
    _client(recorder).clear_cache()
    assert recorder.calls == [["clear-cache"]]


@pytest.mark.parametrize(
    "global_, expected",
    [
        (False, ["config", "vendor-dir"]),
        (True, ["config", "--global", "vendor-dir"]),
    ],
)
def test_get_config_with_global(global_, expected):
    recorder = _Recorder("vendor\n")
    assert _client(recorder).get_config_with_global("vendor-dir", global_) == "vendor"
    assert recorder.calls == [expected]


@pytest.mark.parametrize(
    "global_, expected",
    [
        (False, ["config", "process-timeout", "600"]),
        (True, ["config", "--global", "process-timeout", "600"]),
    ],
)
def test_set_config_with_global(global_, expected):
    recorder = _Recorder()
    _client(recorder).set_config_with_global("process-timeout", "600", global_)
    assert recorder.calls == [expected]


@pytest.mark.parametrize(
    "strict, with_deps, expected",
    [
        (False, False, ["validate"]),
        (True, False, ["validate", "--strict"]),
        (False, True, ["validate", "--with-dependencies"]),
        (True, True, ["validate", "--strict", "--with-dependencies"]),
    ],
)
def test_validate_composer_json(strict, with_deps, expected):
    recorder = _Recorder()
    _client(recorder).validate_composer_json(strict, with_deps)
    assert recorder.calls == [expected]


def test_check_platform_reqs():
    recorder = _Recorder("php 8.2.0 success")
    assert _client(recorder).check_platform_reqs() == "php 8.2.0 success"
    assert recorder.calls == [["check-platform-reqs"]]