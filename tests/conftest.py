import sys
from pathlib import Path

import pytest

# Make ``yiield_lab`` and ``yiield_demo`` importable from a plain checkout
pkg_src = Path(__file__).resolve().parents[1] / "src"
if str(pkg_src) not in sys.path:
    sys.path.insert(0, str(pkg_src))

from yiield_lab.core import AuditorRecord, GovernanceRecord, InsuranceRecord, ProtocolDossier  # noqa: E402


@pytest.fixture
def full_dossier() -> ProtocolDossier:
    """Dossier earning every bonus: 10 + 5 + 3 + 2."""

    return ProtocolDossier(
        name="Blue Chip",
        slug="blue-chip",
        team_status="doxxed",
        auditors=(AuditorRecord("OpenZeppelin", 1), AuditorRecord("PeckShield", 2)),
        insurance=InsuranceRecord("Nexus Mutual", 10_000_000.0),
        governance=GovernanceRecord(True, "dao"),
    )


@pytest.fixture
def bare_dossier() -> ProtocolDossier:
    """Dossier earning no bonus at all."""

    return ProtocolDossier(
        name="Bare",
        slug="bare",
        team_status="anonymous",
        auditors=(),
        insurance=None,
        governance=GovernanceRecord(False),
    )
