"""Security audits of the installed packages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from phpcomposer.runner import ComposerError, build_option_flags

_HIGH_SEVERITIES = frozenset({"high", "critical"})


def _get_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"audit field {key!r} must be a string")
    return value


def _get_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"audit field {key!r} must be a boolean")
    return value


def _get_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"audit field {key!r} must be an integer")
    return value


def _get_str_list(data: Mapping[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"audit field {key!r} must be a list of strings")
    return list(value)


@dataclass
class Vulnerability:
    """One reported security problem in an installed package."""

    package: str = ""
    version: str = ""
    title: str = ""
    link: str = ""
    cve: List[str] = field(default_factory=list)
    advisory: str = ""
    abandoned: bool = False
    severity: str = ""
    source: str = ""
    affectedver: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Vulnerability":
        """Build from a decoded JSON object; wrong field types raise ValueError."""
        if not isinstance(data, Mapping):
            raise ValueError("a vulnerability must be a JSON object")
        return cls(
            package=_get_str(data, "package"),
            version=_get_str(data, "version"),
            title=_get_str(data, "title"),
            link=_get_str(data, "link"),
            cve=_get_str_list(data, "cve"),
            advisory=_get_str(data, "advisory"),
            abandoned=_get_bool(data, "abandoned"),
            severity=_get_str(data, "severity"),
            source=_get_str(data, "source"),
            affectedver=_get_str(data, "affectedver"),
        )


@dataclass
class AuditResult:
    """The parsed result of ``audit --format=json``."""

    vulnerabilities: List[Vulnerability] = field(default_factory=list)
    found: int = 0
    advisory: str = ""
    without_dev: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuditResult":
        """Build from a decoded JSON object; wrong field types raise ValueError."""
        if not isinstance(data, Mapping):
            raise ValueError("an audit result must be a JSON object")
        raw = data.get("vulnerabilities")
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise ValueError("audit field 'vulnerabilities' must be a list")
        return cls(
            vulnerabilities=[Vulnerability.from_dict(item) for item in raw],
            found=_get_int(data, "found"),
            advisory=_get_str(data, "advisory"),
            without_dev=_get_bool(data, "without-dev"),
        )


class AuditMixin:
    """Commands built on ``composer audit``."""

    def audit(self) -> str:
        """Audit the dependencies and return the plain report."""
        return self.run("audit")  # type: ignore[attr-defined]

    def audit_with_json(self) -> AuditResult:
        """Audit the dependencies and parse the JSON report."""
        output = self.run("audit", "--format=json")  # type: ignore[attr-defined]
        return AuditResult.from_dict(json.loads(output))

    def audit_without_dev(self) -> str:
        """Audit the dependencies, leaving out development ones."""
        return self.run("audit", "--no-dev")  # type: ignore[attr-defined]

    def audit_with_format(self, fmt: str) -> str:
        """Audit with the given output format, such as ``table`` or ``plain``."""
        return self.run("audit", f"--format={fmt}")  # type: ignore[attr-defined]

    def has_vulnerabilities(self) -> bool:
        """True when the audit reports any vulnerability.

        A failed audit whose message reports found vulnerabilities also counts.
        """
        try:
            result = self.audit_with_json()
        except (ComposerError, ValueError) as exc:
            message = str(exc)
            if "Found" in message and "vulnerabilities" in message:
                return True
            raise
        return result.found > 0

    def get_high_severity_vulnerabilities(self) -> List[Vulnerability]:
        """The vulnerabilities of severity ``high`` or ``critical``."""
        result = self.audit_with_json()
        return [v for v in result.vulnerabilities if v.severity in _HIGH_SEVERITIES]

    def audit_with_options(self, options: Optional[Mapping[str, str]] = None) -> str:
        """Audit with extra ``--key[=value]`` options."""
        return self.run("audit", *build_option_flags(options))  # type: ignore[attr-defined]

    def audit_lock(self, lock_file_path: str = "") -> str:
        """Audit a composer.lock file, the project's own when no path is given."""
        if not lock_file_path:
            return self.run("audit")  # type: ignore[attr-defined]
        return self.run("audit", lock_file_path)  # type: ignore[attr-defined]

    def get_abandoned_packages(self) -> List[Vulnerability]:
        """The reported entries marked as abandoned."""
        result = self.audit_with_json()
        return [v for v in result.vulnerabilities if v.abandoned]


__all__: Dict[str, Any] | List[str] = ["Vulnerability", "AuditResult", "AuditMixin"]