"""Installing, updating and inspecting a project's dependencies."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from phpcomposer.runner import build_option_flags


class DependenciesMixin:
    """Commands for install, update, dump-autoload and dependency checks."""

    def install(self, no_dev: bool = False, optimize: bool = False) -> None:
        """Install dependencies, as ``install [--no-dev] [--optimize-autoloader]``."""
        args = ["install"]
        if no_dev:
            args.append("--no-dev")
        if optimize:
            args.append("--optimize-autoloader")
        self.run(*args)  # type: ignore[attr-defined]

    def install_with_options(self, options: Optional[Mapping[str, str]] = None) -> None:
        """Install dependencies with extra ``--key[=value]`` options."""
        self.run("install", *build_option_flags(options))  # type: ignore[attr-defined]

    def update(self, packages: Iterable[str] = (), no_dev: bool = False) -> None:
        """Update the given packages, or all of them when none are given."""
        args = ["update"]
        if no_dev:
            args.append("--no-dev")
        args.extend(packages)
        self.run(*args)  # type: ignore[attr-defined]

    def update_with_options(
        self,
        packages: Iterable[str] = (),
        options: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Update packages with extra options placed before the package names."""
        self.run("update", *build_option_flags(options), *packages)  # type: ignore[attr-defined]

    def dump_autoload(self, optimize: bool = False) -> None:
        """Regenerate the autoloader, optimised when asked."""
        args = ["dump-autoload"]
        if optimize:
            args.append("--optimize")
        self.run(*args)  # type: ignore[attr-defined]

    def dump_autoload_with_options(self, options: Optional[Mapping[str, str]] = None) -> None:
        """Regenerate the autoloader with extra options."""
        self.run("dump-autoload", *build_option_flags(options))  # type: ignore[attr-defined]

    def check_dependencies(self) -> str:
        """Check that composer.json and composer.lock agree."""
        return self.run("check")  # type: ignore[attr-defined]

    def suggests(self) -> None:
        """Show the packages suggested by installed packages."""
        self.run("suggests")  # type: ignore[attr-defined]

    def fund_packages(self) -> str:
        """List the packages that accept funding."""
        return self.run("fund")  # type: ignore[attr-defined]

    def run_audit(self) -> str:
        """Look for known security vulnerabilities in the installed packages."""
        return self.run("audit")  # type: ignore[attr-defined]