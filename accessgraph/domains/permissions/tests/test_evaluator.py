"""Unit tests for PermissionEvaluator.

Real GroupClosureResolver over fake repositories, no DB.
"""

from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock

import pytest

from accessgraph.core.config import Settings
from accessgraph.core.shared_models import ObjectKind, ObjectPermissionType, SystemPermissionType
from accessgraph.domains.memberships.exceptions import UnknownEntityError
from accessgraph.domains.permissions.evaluator import PermissionEvaluator
from accessgraph.schemas.entity import EntityRef

DB = MagicMock()

READ = ObjectPermissionType.READ
UPDATE = ObjectPermissionType.UPDATE
DELETE = ObjectPermissionType.DELETE
CONNECTION = ObjectKind.CONNECTION

U1 = EntityRef.user("u1")
U2 = EntityRef.user("u2")
G1 = EntityRef.group("g1")
G2 = EntityRef.group("g2")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def graph(fake_entity_repo, fake_membership_repo):
    """u1 ∈ g1 ∈ g2; u2 ∈ g2."""
    fake_entity_repo.seed(U1, U2, G1, G2)
    fake_membership_repo.seed(U1, "g1")
    fake_membership_repo.seed(G1, "g2")
    fake_membership_repo.seed(U2, "g2")


def _build(resolver, object_repo, system_repo, **overrides) -> PermissionEvaluator:
    return PermissionEvaluator(
        resolver=resolver,
        object_permission_repo=object_repo,
        system_permission_repo=system_repo,
        settings=Settings(**overrides),
    )


# ---------------------------------------------------------------------------
# get_permission()
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_two_level_inheritance(evaluator, graph, fake_object_permission_repo):
    """READ on conn-5 granted to g2 reaches u1 through g1."""
    fake_object_permission_repo.seed(G2, CONNECTION, READ, "conn-5")

    assert await evaluator.has_any_permission(DB, U1, CONNECTION, {READ}, "conn-5") is True
    permission = await evaluator.get_permission(DB, U1, CONNECTION, READ, "conn-5")
    assert permission is not None
    assert permission.entity == G2


@pytest.mark.asyncio
async def test_direct_grant_takes_priority(evaluator, graph, fake_object_permission_repo):
    """When both a group and the entity hold the row, the direct row is returned."""
    fake_object_permission_repo.seed(G1, CONNECTION, READ, "conn-5")
    fake_object_permission_repo.seed(U1, CONNECTION, READ, "conn-5")

    permission = await evaluator.get_permission(DB, U1, CONNECTION, READ, "conn-5")

    assert permission.entity == U1


@pytest.mark.asyncio
async def test_direct_only_mode_ignores_inheritance(
    evaluator, graph, fake_object_permission_repo
):
    """Grant on u1 only; u2 is in a group with the grant; direct-only u2 finds nothing."""
    fake_object_permission_repo.seed(U1, CONNECTION, READ, "conn-5")
    fake_object_permission_repo.seed(G2, CONNECTION, READ, "conn-5")

    assert await evaluator.get_permission(
        DB, U2, CONNECTION, READ, "conn-5", inherit=False
    ) is None
    assert await evaluator.get_permission(DB, U2, CONNECTION, READ, "conn-5") is not None


@pytest.mark.asyncio
async def test_direct_only_mode_skips_closure(
    evaluator, graph, fake_membership_repo, fake_object_permission_repo
):
    """inherit=False never walks the membership graph."""
    await evaluator.get_permission(DB, U1, CONNECTION, READ, "conn-5", inherit=False)

    assert fake_membership_repo._calls == []


@pytest.mark.asyncio
async def test_not_found_returns_none(evaluator, graph):
    """No row anywhere is NotFound (None)."""
    assert await evaluator.get_permission(DB, U1, CONNECTION, DELETE, "conn-5") is None


@pytest.mark.asyncio
async def test_permission_kind_is_respected(evaluator, graph, fake_object_permission_repo):
    """A grant on a connection does not leak to a sharing profile with the same identifier."""
    fake_object_permission_repo.seed(U1, CONNECTION, READ, "5")

    assert await evaluator.get_permission(DB, U1, ObjectKind.SHARING_PROFILE, READ, "5") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("inherit", [True, False])
async def test_unknown_entity_raises(evaluator, inherit):
    """Unknown entities raise in both modes."""
    with pytest.raises(UnknownEntityError):
        await evaluator.get_permission(
            DB, EntityRef.user("ghost"), CONNECTION, READ, "conn-5", inherit=inherit
        )


# ---------------------------------------------------------------------------
# has_any_permission() / filter_accessible()
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_filter_mixed_direct_and_inherited(evaluator, graph, fake_object_permission_repo):
    """READ on a directly, UPDATE on c via group, nothing on b."""
    fake_object_permission_repo.seed(U1, CONNECTION, READ, "a")
    fake_object_permission_repo.seed(G1, CONNECTION, UPDATE, "c")

    result = await evaluator.filter_accessible(DB, U1, CONNECTION, {READ, UPDATE}, ["a", "b", "c"])

    assert result == {"a", "c"}


@pytest.mark.asyncio
async def test_filter_is_one_bulk_call(evaluator, graph, fake_object_permission_repo):
    """Any number of candidates costs a single repository call."""
    candidates = [f"conn-{i}" for i in range(500)]
    fake_object_permission_repo.seed(G2, CONNECTION, READ, "conn-42")

    result = await evaluator.filter_accessible(DB, U1, CONNECTION, {READ}, candidates)

    assert result == {"conn-42"}
    bulk_calls = [
        c for c in fake_object_permission_repo._calls if c[0] == "get_accessible_identifiers"
    ]
    assert len(bulk_calls) == 1


@dataclass
class FilterCase:
    desc: str
    types: set
    ids: list
    inherit: bool = True
    known_groups: set = field(default_factory=set)


FILTER_CASES = [
    FilterCase(desc="read only", types={READ}, ids=["a", "b", "c", "d"]),
    FilterCase(desc="read or update", types={READ, UPDATE}, ids=["a", "b", "c", "d"]),
    FilterCase(desc="delete", types={DELETE}, ids=["a", "b", "c", "d"]),
    FilterCase(desc="direct only", types={READ, UPDATE}, ids=["a", "b", "c"], inherit=False),
    FilterCase(desc="duplicates in input", types={READ, UPDATE}, ids=["a", "a", "c", "c"]),
    FilterCase(desc="known group", types={DELETE}, ids=["d"], known_groups={"idp-ops"}),
    FilterCase(desc="no types", types=set(), ids=["a", "b"]),
    FilterCase(desc="no ids", types={READ}, ids=[]),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("case", FILTER_CASES, ids=lambda c: c.desc)
async def test_filter_matches_per_identifier_checks(
    evaluator, graph, fake_object_permission_repo, case
):
    """The bulk answer equals single-object lookups, one identifier at a time."""
    fake_object_permission_repo.seed(U1, CONNECTION, READ, "a")
    fake_object_permission_repo.seed(G1, CONNECTION, UPDATE, "c")
    fake_object_permission_repo.seed(G2, CONNECTION, READ, "b")
    fake_object_permission_repo.seed(EntityRef.group("idp-ops"), CONNECTION, DELETE, "d")
    options = {"inherit": case.inherit, "known_groups": case.known_groups}

    bulk = await evaluator.filter_accessible(DB, U1, CONNECTION, case.types, case.ids, **options)

    expected = set()
    for object_id in case.ids:
        for permission_type in case.types:
            granted = await evaluator.get_permission(
                DB, U1, CONNECTION, permission_type, object_id, **options
            )
            if granted is not None:
                expected.add(object_id)
    one_by_one = {
        object_id
        for object_id in case.ids
        if await evaluator.has_any_permission(
            DB, U1, CONNECTION, case.types, object_id, **options
        )
    }

    assert bulk == expected
    assert one_by_one == expected
    assert bulk <= set(case.ids)


@pytest.mark.asyncio
async def test_filter_never_returns_foreign_identifiers(resolver, graph):
    """Identifiers the store returns but the caller never asked about are dropped."""
    object_repo = MagicMock()
    object_repo.get_accessible_identifiers = AsyncMock(return_value={"a", "not-asked"})
    evaluator = _build(resolver, object_repo, MagicMock())

    result = await evaluator.filter_accessible(DB, U1, CONNECTION, {READ}, ["a", "b"])

    assert result == {"a"}


@pytest.mark.asyncio
async def test_filter_empty_types_still_checks_entity(evaluator):
    """An empty type set does not hide an unknown entity."""
    with pytest.raises(UnknownEntityError):
        await evaluator.filter_accessible(DB, EntityRef.user("ghost"), CONNECTION, set(), ["a"])


@pytest.mark.asyncio
async def test_filter_empty_types_skips_permission_query(
    evaluator, graph, fake_object_permission_repo
):
    """Nothing to ask means no permission query."""
    assert await evaluator.filter_accessible(DB, U1, CONNECTION, set(), ["a"]) == set()
    assert fake_object_permission_repo._calls == []


# ---------------------------------------------------------------------------
# Inheritance configuration
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_inherit_default_comes_from_settings(
    resolver, graph, fake_object_permission_repo, fake_system_permission_repo
):
    """With PERMISSION_INHERITANCE_DEFAULT off, checks are direct-only unless asked."""
    fake_object_permission_repo.seed(G2, CONNECTION, READ, "conn-5")
    evaluator = _build(
        resolver,
        fake_object_permission_repo,
        fake_system_permission_repo,
        PERMISSION_INHERITANCE_DEFAULT=False,
    )

    assert await evaluator.has_any_permission(DB, U1, CONNECTION, {READ}, "conn-5") is False
    assert (
        await evaluator.has_any_permission(DB, U1, CONNECTION, {READ}, "conn-5", inherit=True)
        is True
    )


@pytest.mark.asyncio
async def test_user_group_inheritance_can_be_disabled(
    resolver, graph, fake_object_permission_repo, fake_system_permission_repo
):
    """A group acting as subject stops inheriting from parent groups when disabled."""
    fake_object_permission_repo.seed(G2, CONNECTION, READ, "conn-5")
    evaluator = _build(
        resolver,
        fake_object_permission_repo,
        fake_system_permission_repo,
        USER_GROUP_INHERITANCE_ENABLED=False,
    )

    assert await evaluator.has_any_permission(DB, G1, CONNECTION, {READ}, "conn-5") is False
    # Users still inherit through the same groups.
    assert await evaluator.has_any_permission(DB, U1, CONNECTION, {READ}, "conn-5") is True


# ---------------------------------------------------------------------------
# Permission sets and system permissions
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_permissions_direct_and_inherited(
    evaluator, graph, fake_object_permission_repo
):
    """The permission set keeps the granting entity of each row."""
    fake_object_permission_repo.seed(U1, CONNECTION, READ, "a")
    fake_object_permission_repo.seed(G2, CONNECTION, UPDATE, "b")

    direct = await evaluator.get_permissions(DB, U1, CONNECTION, inherit=False)
    effective = await evaluator.get_permissions(DB, U1, CONNECTION)

    assert [(p.entity, p.object_identifier) for p in direct] == [(U1, "a")]
    assert {(p.entity, p.object_identifier) for p in effective} == {(U1, "a"), (G2, "b")}


@pytest.mark.asyncio
async def test_administrator_through_group(evaluator, graph, fake_system_permission_repo):
    """ADMINISTER granted to g2 makes u1 an administrator."""
    fake_system_permission_repo.seed(G2, SystemPermissionType.ADMINISTER)

    assert await evaluator.is_administrator(DB, U1) is True
    assert (
        await evaluator.has_system_permission(
            DB, U1, SystemPermissionType.ADMINISTER, inherit=False
        )
        is False
    )


@pytest.mark.asyncio
async def test_administrator_through_known_group(evaluator, graph, fake_system_permission_repo):
    """An externally asserted group can carry the administrator capability."""
    idp_admins = EntityRef.group("idp-admins")
    fake_system_permission_repo.seed(idp_admins, SystemPermissionType.ADMINISTER)

    assert await evaluator.is_administrator(DB, U2) is False
    assert await evaluator.is_administrator(DB, U2, known_groups={"idp-admins"}) is True


@pytest.mark.asyncio
async def test_get_system_permissions(evaluator, graph, fake_system_permission_repo):
    """System permission sets honour the inherit flag."""
    fake_system_permission_repo.seed(U1, SystemPermissionType.CREATE_CONNECTION)
    fake_system_permission_repo.seed(G1, SystemPermissionType.AUDIT)

    direct = await evaluator.get_system_permissions(DB, U1, inherit=False)
    effective = await evaluator.get_system_permissions(DB, U1)

    assert [p.type for p in direct] == [SystemPermissionType.CREATE_CONNECTION]
    assert {p.type for p in effective} == {
        SystemPermissionType.CREATE_CONNECTION,
        SystemPermissionType.AUDIT,
    }
