"""Funding information of installed packages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from phpcomposer.runner import build_option_flags


@dataclass
class FundingInfo:
    """Funding details of one package."""

    name: str = ""
    urls: List[str] = field(default_factory=list)
    funding: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FundingInfo":
        """Build from a decoded JSON object; wrong field types raise ValueError."""
        if not isinstance(data, Mapping):
            raise ValueError("funding information must be a JSON object")
        name = data.get("name") or ""
        urls = data.get("urls") or []
        funding = data.get("funding", False)
        if funding is None:
            funding = False
        if not isinstance(name, str):
            raise ValueError("funding field 'name' must be a string")
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise ValueError("funding field 'urls' must be a list of strings")
        if not isinstance(funding, bool):
            raise ValueError("funding field 'funding' must be a boolean")
        return cls(name=name, urls=list(urls), funding=funding)


class FundMixin:
    """Commands built on ``composer fund``."""

    def fund(self) -> str:
        """The funding report of the project."""
        return self.run("fund")  # type: ignore[attr-defined]

    def fund_with_json(self) -> List[FundingInfo]:
        """The funding report, parsed from ``fund --format=json``."""
        output = self.run("fund", "--format=json")  # type: ignore[attr-defined]
        data = json.loads(output)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError("funding report must be a JSON array")
        return [FundingInfo.from_dict(item) for item in data]

    def fund_with_package(self, package_name: str) -> str:
        """The funding report of one package."""
        return self.run("fund", package_name)  # type: ignore[attr-defined]

    def get_funding_urls(self) -> Dict[str, List[str]]:
        """Map each funded package with links to its funding URLs."""
        return {
            info.name: info.urls
            for info in self.fund_with_json()
            if info.funding and info.urls
        }

    def has_funding(self) -> bool:
        """True unless the text report says there is no funding."""
        output = self.run("fund", "--format=text")  # type: ignore[attr-defined]
        return "No funding" not in output

    def fund_with_options(self, options: Optional[Mapping[str, str]] = None) -> str:
        """The funding report with extra ``--key[=value]`` options."""
        return self.run("fund", *build_option_flags(options))  # type: ignore[attr-defined]