"""Running the composer executable and the core shared by the client."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

DEFAULT_TIMEOUT = 600.0

_EXECUTABLE_NAMES = ("composer", "composer.phar")


class ComposerError(Exception):
    """Base class for every error raised by this package."""


class ComposerNotFoundError(ComposerError):
    """The composer executable could not be found."""


class CommandExecutionError(ComposerError):
    """A composer command failed; carries the combined output it produced."""

    def __init__(self, message: str, output: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode


class Runner(Protocol):
    def __call__(
        self,
        executable: str,
        args: Sequence[str],
        cwd: Optional[str],
        env: Optional[Mapping[str, str]],
        timeout: Optional[float],
    ) -> str: ...


def _decode(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


class SubprocessRunner:
    """Runs the executable as a child process and returns stdout and stderr combined."""

    def __call__(
        self,
        executable: str,
        args: Sequence[str],
        cwd: Optional[str],
        env: Optional[Mapping[str, str]],
        timeout: Optional[float],
    ) -> str:
        try:
            completed = subprocess.run(
                [executable, *args],
                cwd=cwd or None,
                env=dict(env) if env else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            output = _decode(exc.output)
            raise CommandExecutionError(
                f"failed to run composer command: timed out after {timeout} seconds, output: {output}",
                output,
            ) from exc
        except OSError as exc:
            raise CommandExecutionError(f"failed to run composer command: {exc}, output: ") from exc

        output = _decode(completed.stdout)
        if completed.returncode != 0:
            raise CommandExecutionError(
                f"failed to run composer command: exit status {completed.returncode}, output: {output}",
                output,
                completed.returncode,
            )
        return output


ScriptedError = Union[str, BaseException, None]


class ScriptedRunner:
    """Answers commands from a table of canned responses.

    A command is looked up first by all its arguments joined with spaces,
    then by its first argument alone. Commands with no entry are handed to
    the fallback runner.
    """

    def __init__(self, fallback: Optional[Runner] = None):
        self.fallback: Runner = fallback if fallback is not None else SubprocessRunner()
        self._responses: Dict[str, Tuple[str, ScriptedError]] = {}

    def add(self, command: str, output: str = "", error: ScriptedError = None) -> None:
        """Register the output, and optionally the error, for a command line."""
        self._responses[command] = (output, error)

    def clear(self) -> None:
        """Forget every registered response."""
        self._responses.clear()

    def _lookup(self, args: Sequence[str]) -> Optional[Tuple[str, ScriptedError]]:
        if not args:
            return None
        joined = " ".join(args)
        if joined in self._responses:
            return self._responses[joined]
        return self._responses.get(args[0])

    def __call__(
        self,
        executable: str,
        args: Sequence[str],
        cwd: Optional[str],
        env: Optional[Mapping[str, str]],
        timeout: Optional[float],
    ) -> str:
        response = self._lookup(args)
        if response is None:
            return self.fallback(executable, args, cwd, env, timeout)
        output, error = response
        if error is None:
            return output
        if isinstance(error, BaseException):
            raise error
        raise CommandExecutionError(error, output)


@dataclass
class Options:
    """Settings for a composer client.

    ``detector`` returns the executable path or raises ComposerNotFoundError;
    ``installer`` is called when detection fails and ``auto_install`` is set.
    """

    executable_path: str = ""
    working_dir: str = ""
    auto_install: bool = True
    default_timeout: Optional[float] = DEFAULT_TIMEOUT
    env: Optional[Mapping[str, str]] = None
    detector: Optional[Callable[[], str]] = None
    installer: Optional[Callable[[], None]] = None
    runner: Optional[Runner] = None
    verify_executable: bool = True


def default_options() -> Options:
    """Options with the current directory, auto-install and a ten minute timeout."""
    return Options(working_dir="", auto_install=True, default_timeout=DEFAULT_TIMEOUT)


def build_option_flags(options: Optional[Mapping[str, str]]) -> List[str]:
    """Turn ``{"key": "value", "flag": ""}`` into ``["--key=value", "--flag"]``."""
    if not options:
        return []
    return [f"--{key}" if value == "" else f"--{key}={value}" for key, value in options.items()]


def _locate_composer() -> str:
    for name in _EXECUTABLE_NAMES:
        path = shutil.which(name)
        if path:
            return path
    raise ComposerNotFoundError("composer executable not found in PATH")


class ComposerBase:
    """Holds the executable, working directory and environment, and runs commands."""

    def __init__(self, options: Optional[Options] = None):
        if options is None:
            options = default_options()
        self.executable_path: str = options.executable_path
        self.working_dir: str = options.working_dir
        self.auto_install: bool = options.auto_install
        self.default_timeout: Optional[float] = options.default_timeout
        self.env: Optional[Dict[str, str]] = dict(options.env) if options.env is not None else None
        self.runner: Runner = options.runner if options.runner is not None else SubprocessRunner()

        if not self.executable_path:
            self.executable_path = self._detect(options)
        elif options.verify_executable and not os.path.exists(self.executable_path):
            raise ComposerNotFoundError(
                f"composer executable not found: the given path does not exist: {self.executable_path}"
            )

    def _detect(self, options: Options) -> str:
        detect = options.detector or _locate_composer
        try:
            return detect()
        except ComposerNotFoundError as exc:
            if not (self.auto_install and options.installer is not None):
                raise ComposerNotFoundError(f"composer executable not found: {exc}") from exc
            try:
                options.installer()
            except Exception as install_exc:
                raise ComposerError(f"failed to install composer: {install_exc}") from install_exc
        try:
            return detect()
        except ComposerNotFoundError as exc:
            raise ComposerNotFoundError(f"composer executable not found: {exc}") from exc

    def is_installed(self) -> bool:
        """True when an executable path is known."""
        return self.executable_path != ""

    def run(self, *args: str) -> str:
        """Run a composer command with the default timeout and return its output."""
        return self.run_with_timeout(self.default_timeout, *args)

    def run_with_timeout(self, timeout: Optional[float], *args: str) -> str:
        """Run a composer command, giving up after ``timeout`` seconds."""
        return self.runner(
            self.executable_path,
            list(args),
            self.working_dir or None,
            self.env or None,
            timeout,
        )