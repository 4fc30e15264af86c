"""Protocol dossier directory and free-text protocol name resolution."""

from __future__ import annotations

import logging
import re
import tomllib
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .core.models import (
    GOVERNANCE_TYPES,
    TEAM_STATUSES,
    AuditorRecord,
    GovernanceRecord,
    InsuranceRecord,
    ProtocolDossier,
)
from .scoring.enhance import auditor_tier

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOLS_PATH = Path(__file__).with_name("data") / "protocols.toml"

_WHITESPACE = re.compile(r"\s+")
_VERSION_SUFFIX = re.compile(r"-v\d+$")


def slugify(name: str) -> str:
    """Lowercase ``name`` and replace whitespace runs with hyphens."""

    return _WHITESPACE.sub("-", name.strip().lower())


class ProtocolDirectory:
    """Read-only lookup from protocol names to curated dossiers.

    Names are resolved in a fixed order, the first match winning:

    1. the alias table, keyed by the lowercase name;
    2. the dossier map, keyed by the hyphenated slug;
    3. the dossier map again with a trailing ``-v<digits>`` removed;
    4. a scan for a dossier whose display name matches ignoring case.
    """

    def __init__(
        self,
        dossiers: Mapping[str, ProtocolDossier],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._dossiers = MappingProxyType(dict(dossiers))
        self._aliases = MappingProxyType(
            {key.lower(): value for key, value in (aliases or {}).items()}
        )
        for alias, slug in self._aliases.items():
            if slug not in self._dossiers:
                logger.warning("Alias %r points to unknown protocol %r", alias, slug)

    @property
    def dossiers(self) -> Mapping[str, ProtocolDossier]:
        return self._dossiers

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def match_alias(self, name: str) -> ProtocolDossier | None:
        slug = self._aliases.get(name.strip().lower())
        if slug is None:
            return None
        return self._dossiers.get(slug)

    def match_slug(self, name: str) -> ProtocolDossier | None:
        return self._dossiers.get(slugify(name))

    def match_unversioned_slug(self, name: str) -> ProtocolDossier | None:
        slug = slugify(name)
        bare = _VERSION_SUFFIX.sub("", slug)
        if bare == slug:
            return None
        return self._dossiers.get(bare)

    def match_display_name(self, name: str) -> ProtocolDossier | None:
        wanted = name.strip().lower()
        for dossier in self._dossiers.values():
            if dossier.name.lower() == wanted:
                return dossier
        return None

    def resolve(self, name: str) -> ProtocolDossier | None:
        """Return the dossier for ``name`` or ``None`` when none is curated."""

        if not name:
            return None
        for step in (
            self.match_alias,
            self.match_slug,
            self.match_unversioned_slug,
            self.match_display_name,
        ):
            dossier = step(name)
            if dossier is not None:
                return dossier
        return None

    def slugs(self) -> list[str]:
        return list(self._dossiers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __len__(self) -> int:
        return len(self._dossiers)


def _parse_auditor(slug: str, raw: Mapping[str, Any]) -> AuditorRecord:
    name = str(raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"Protocol {slug!r} has an auditor without a name")
    tier = raw.get("tier")
    if tier is None:
        tier = auditor_tier(name)
    if tier not in (1, 2, 3):
        raise ValueError(f"Protocol {slug!r} auditor {name!r} has invalid tier {tier!r}")
    return AuditorRecord(name=name, tier=int(tier), report_url=raw.get("report_url"))


def _parse_launched(slug: str, value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"Protocol {slug!r} has invalid launch date {value!r}") from exc


def _parse_exploits(slug: str, value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Protocol {slug!r} has invalid exploit count {value!r}") from exc


def parse_dossier(slug: str, raw: Mapping[str, Any]) -> ProtocolDossier:
    """Build a :class:`ProtocolDossier` from one table of the dossier file."""

    team_status = raw.get("team_status", "anonymous")
    if team_status not in TEAM_STATUSES:
        raise ValueError(f"Protocol {slug!r} has unknown team status {team_status!r}")

    insurance = None
    if raw.get("insurance"):
        ins = raw["insurance"]
        if not isinstance(ins, Mapping):
            raise ValueError(f"Protocol {slug!r} insurance must be a table, got {ins!r}")
        insurance = InsuranceRecord(
            provider=str(ins.get("provider", "")),
            coverage_usd=float(ins.get("coverage_usd", 0.0)),
            url=ins.get("url"),
        )

    governance = None
    if raw.get("governance") is not None:
        gov = raw["governance"]
        if not isinstance(gov, Mapping):
            raise ValueError(f"Protocol {slug!r} governance must be a table, got {gov!r}")
        gov_type = gov.get("type")
        if gov_type is not None and gov_type not in GOVERNANCE_TYPES:
            raise ValueError(f"Protocol {slug!r} has unknown governance type {gov_type!r}")
        governance = GovernanceRecord(
            has_governance=bool(gov.get("has_governance", False)),
            type=gov_type,
            description=gov.get("description"),
        )

    return ProtocolDossier(
        name=str(raw.get("name", slug)),
        slug=str(raw.get("slug", slug)),
        team_status=team_status,
        auditors=tuple(_parse_auditor(slug, a) for a in raw.get("auditors", [])),
        insurance=insurance,
        governance=governance,
        team_description=raw.get("team_description"),
        notes=raw.get("notes"),
        launched=_parse_launched(slug, raw.get("launched")),
        exploits=_parse_exploits(slug, raw.get("exploits", 0)),
    )


def load_directory(path: str | Path | None = None) -> ProtocolDirectory:
    """Load a dossier table from TOML.

    Parameters
    ----------
    path:
        TOML file with an ``[aliases]`` table and one ``[protocols.<slug>]``
        table per protocol. Defaults to the bundled table.
    """

    cfg_path = Path(path) if path else DEFAULT_PROTOCOLS_PATH
    with open(cfg_path, "rb") as f:
        raw = tomllib.load(f)

    dossiers = {
        slug: parse_dossier(slug, entry) for slug, entry in raw.get("protocols", {}).items()
    }
    aliases = {str(k): str(v) for k, v in raw.get("aliases", {}).items()}
    logger.debug("Loaded %d protocol dossiers from %s", len(dossiers), cfg_path)
    return ProtocolDirectory(dossiers, aliases)


@lru_cache(maxsize=1)
def default_directory() -> ProtocolDirectory:
    """Bundled directory, loaded once per process."""

    return load_directory()


def resolve(name: str, directory: ProtocolDirectory | None = None) -> ProtocolDossier | None:
    if directory is None:
        directory = default_directory()
    return directory.resolve(name)


__all__ = [
    "DEFAULT_PROTOCOLS_PATH",
    "ProtocolDirectory",
    "default_directory",
    "load_directory",
    "parse_dossier",
    "resolve",
    "slugify",
]
