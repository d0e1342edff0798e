"""Tests for NotificationTargetResolver."""

import logging
from unittest.mock import AsyncMock

import pytest

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.target import (
    AdministrativeCohort,
    Broadcast,
    GradeCohort,
    Single,
)
from lodge.domain.notification.service.targeting import NotificationTargetResolver


@pytest.fixture
def population() -> list[PrincipalId]:
    return [PrincipalId.generate() for _ in range(4)]


@pytest.fixture
def directory(population: list[PrincipalId]) -> AsyncMock:
    mock = AsyncMock()
    mock.active_ids.return_value = set(population)
    return mock


@pytest.fixture
def resolver(directory: AsyncMock) -> NotificationTargetResolver:
    return NotificationTargetResolver(directory=directory)


class TestBroadcast:
    @pytest.mark.asyncio
    async def test_everyone_active(
        self, resolver: NotificationTargetResolver, population: list[PrincipalId]
    ) -> None:
        assert await resolver.resolve(Broadcast()) == set(population)

    @pytest.mark.asyncio
    async def test_never_includes_excluded_sender(
        self, resolver: NotificationTargetResolver, population: list[PrincipalId]
    ) -> None:
        sender = population[0]

        result = await resolver.resolve(Broadcast(exclude=sender))

        assert sender not in result
        assert result == set(population[1:])


class TestGradeCohort:
    @pytest.mark.asyncio
    async def test_general_equals_full_active_set(
        self,
        resolver: NotificationTargetResolver,
        directory: AsyncMock,
        population: list[PrincipalId],
    ) -> None:
        assert await resolver.resolve(GradeCohort(grade="general")) == set(population)
        directory.active_ids.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_queries_grades_at_or_above(
        self, resolver: NotificationTargetResolver, directory: AsyncMock
    ) -> None:
        await resolver.resolve(GradeCohort(grade="companion"))

        directory.active_ids.assert_awaited_once_with(
            grades=frozenset({Grade.COMPANION, Grade.MASTER})
        )

    @pytest.mark.asyncio
    async def test_unknown_grade_resolves_to_nobody(
        self,
        resolver: NotificationTargetResolver,
        directory: AsyncMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="lodge.domain.notification.service.targeting"):
            result = await resolver.resolve(GradeCohort(grade="grand_master"))

        assert result == frozenset()
        directory.active_ids.assert_not_awaited()
        assert caplog.records


class TestAdministrativeCohort:
    @pytest.mark.asyncio
    async def test_unions_admin_tiers_with_notifying_offices(
        self, resolver: NotificationTargetResolver, directory: AsyncMock
    ) -> None:
        await resolver.resolve(AdministrativeCohort())

        directory.active_ids.assert_awaited_once_with(
            tiers=frozenset({Tier.ADMIN, Tier.SUPERADMIN}),
            offices=frozenset({Office.PRESIDING_OFFICER, Office.SECRETARY}),
        )

    @pytest.mark.asyncio
    async def test_excludes_sender(
        self, resolver: NotificationTargetResolver, population: list[PrincipalId]
    ) -> None:
        result = await resolver.resolve(AdministrativeCohort(exclude=population[2]))
        assert population[2] not in result


class TestSingle:
    @pytest.mark.asyncio
    async def test_returns_exactly_that_id_without_lookup(
        self, resolver: NotificationTargetResolver, directory: AsyncMock
    ) -> None:
        target = PrincipalId.generate()

        assert await resolver.resolve(Single(principal_id=target)) == {target}
        directory.active_ids.assert_not_awaited()


class TestDeterminism:
    @pytest.mark.asyncio
    async def test_same_inputs_same_set(self, resolver: NotificationTargetResolver) -> None:
        spec = GradeCohort(grade="apprentice")
        assert await resolver.resolve(spec) == await resolver.resolve(spec)
