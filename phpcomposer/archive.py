"""Creating archives of the project or of a single package."""

from __future__ import annotations

from typing import List, Mapping, Optional

from phpcomposer.runner import build_option_flags


def _package_target(package_name: str, version: str) -> str:
    return f"{package_name}={version}" if version else package_name


class ArchiveMixin:
    """Commands built on ``composer archive``."""

    def archive(self, destination: str) -> str:
        """Archive the project as a zip file into ``destination``."""
        return self.run("archive", "--format=zip", f"--dir={destination}")  # type: ignore[attr-defined]

    def archive_with_format(self, destination: str, fmt: str) -> str:
        """Archive the project in the given format, such as ``zip`` or ``tar``."""
        return self.run("archive", f"--format={fmt}", f"--dir={destination}")  # type: ignore[attr-defined]

    def archive_with_options(
        self, destination: str, options: Optional[Mapping[str, str]] = None
    ) -> str:
        """Archive the project with extra ``--key[=value]`` options."""
        args: List[str] = ["archive", f"--dir={destination}", *build_option_flags(options)]
        return self.run(*args)  # type: ignore[attr-defined]

    def archive_package(self, package_name: str, version: str, destination: str) -> str:
        """Archive one package, at ``version`` when given, into ``destination``."""
        return self.run(  # type: ignore[attr-defined]
            "archive", _package_target(package_name, version), f"--dir={destination}"
        )

    def archive_package_with_options(
        self,
        package_name: str,
        version: str,
        destination: str,
        options: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Archive one package with extra options placed after the destination."""
        args: List[str] = [
            "archive",
            _package_target(package_name, version),
            f"--dir={destination}",
            *build_option_flags(options),
        ]
        return self.run(*args)  # type: ignore[attr-defined]