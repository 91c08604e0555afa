"""Listing the licenses of installed packages."""

from __future__ import annotations

from typing import Mapping, Optional

from phpcomposer.runner import build_option_flags


class LicensesMixin:
    """Commands built on ``composer licenses``."""

    def licenses(self) -> str:
        """The licenses of the installed packages."""
        return self.run("licenses")  # type: ignore[attr-defined]

    def licenses_with_format(self, fmt: str) -> str:
        """The licenses in a given output format, such as ``json``."""
        return self.run("licenses", f"--format={fmt}")  # type: ignore[attr-defined]

    def licenses_with_options(self, options: Optional[Mapping[str, str]] = None) -> str:
        """The licenses with extra ``--key[=value]`` options."""
        return self.run("licenses", *build_option_flags(options))  # type: ignore[attr-defined]

    def check_licenses(self) -> str:
        """Check the compatibility of the installed packages' licenses."""
        return self.run("licenses", "--check")  # type: ignore[attr-defined]