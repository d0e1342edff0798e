"""Tests for the static permission catalog."""

import pytest

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.tier import Tier
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.catalog import CATALOG, PermissionCatalog
from lodge.domain.shared.authorization.startup import validate_authorization
from lodge.domain.shared.error import ConfigurationError


class TestCatalogContents:
    def test_superadmin_has_no_row(self) -> None:
        assert Tier.SUPERADMIN not in CATALOG.tier_grants

    def test_general_tier_grants_nothing(self) -> None:
        assert CATALOG.tier_grants[Tier.GENERAL] == frozenset()

    def test_master_reads_every_kind(self) -> None:
        grants = CATALOG.grade_grants[Grade.MASTER]
        assert {
            Capability.READ_MEMBERS,
            Capability.READ_DOCUMENTS,
            Capability.READ_PROGRAMS,
        } <= grants

    def test_apprentice_and_companion_match(self) -> None:
        assert CATALOG.grade_grants[Grade.APPRENTICE] == CATALOG.grade_grants[Grade.COMPANION]

    def test_orator_may_approve_submissions(self) -> None:
        assert Capability.APPROVE_SUBMISSIONS in CATALOG.office_grants[Office.ORATOR]

    def test_offices_granting_send_notifications(self) -> None:
        assert CATALOG.offices_granting(Capability.SEND_NOTIFICATIONS) == {
            Office.PRESIDING_OFFICER,
            Office.SECRETARY,
        }


class TestCatalogImmutability:
    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            CATALOG.grade_grants[Grade.APPRENTICE] = frozenset()  # type: ignore[index]

    def test_grant_sets_are_frozen(self) -> None:
        assert isinstance(CATALOG.office_grants[Office.SECRETARY], frozenset)

    def test_catalog_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            CATALOG.tier_grants = {}  # type: ignore[misc]


class TestValidateCoverage:
    def test_shipped_catalog_is_complete(self) -> None:
        CATALOG.validate_coverage()
        validate_authorization()

    def test_missing_office_is_reported(self) -> None:
        offices = dict(CATALOG.office_grants)
        del offices[Office.HOSPITALLER]
        catalog = PermissionCatalog(
            tier_grants=CATALOG.tier_grants,
            grade_grants=CATALOG.grade_grants,
            office_grants=offices,
        )

        with pytest.raises(ConfigurationError, match="hospitaller"):
            catalog.validate_coverage()

    def test_superadmin_row_is_rejected(self) -> None:
        tiers = dict(CATALOG.tier_grants)
        tiers[Tier.SUPERADMIN] = frozenset(Capability)
        catalog = PermissionCatalog(
            tier_grants=tiers,
            grade_grants=CATALOG.grade_grants,
            office_grants=CATALOG.office_grants,
        )

        with pytest.raises(ConfigurationError, match="wildcard"):
            catalog.validate_coverage()
