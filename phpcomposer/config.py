"""Validation, configuration and cache commands."""

from __future__ import annotations


class ConfigMixin:
    """Commands for validate, config and clear-cache."""

    def validate(self) -> None:
        """Validate composer.json; a failure raises."""
        self.run("validate")  # type: ignore[attr-defined]

    def get_composer_home(self) -> str:
        """Composer's global home directory."""
        output = self.run("config", "--global", "home")  # type: ignore[attr-defined]
        return output.strip()

    def clear_cache(self) -> None:
        """Empty composer's cache."""
        self.run("clear-cache")  # type: ignore[attr-defined]

    def get_config_with_global(self, setting: str, global_: bool = False) -> str:
        """Read a configuration setting, from the global config when ``global_``."""
        args = ["config"]
        if global_:
            args.append("--global")
        args.append(setting)
        return self.run(*args).strip()  # type: ignore[attr-defined]

    def set_config_with_global(self, setting: str, value: str, global_: bool = False) -> None:
        """Write a configuration setting, to the global config when ``global_``."""
        args = ["config"]
        if global_:
            args.append("--global")
        args.extend((setting, value))
        self.run(*args)  # type: ignore[attr-defined]

    def validate_composer_json(self, strict: bool = False, with_dependencies: bool = False) -> None:
        """Validate composer.json, optionally strictly and with its dependencies."""
        args = ["validate"]
        if strict:
            args.append("--strict")
        if with_dependencies:
            args.append("--with-dependencies")
        self.run(*args)  # type: ignore[attr-defined]

    def check_platform_reqs(self) -> str:
        """Check that the platform meets the requirements."""
        return self.run("check-platform-reqs")  # type: ignore[attr-defined]