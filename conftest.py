"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and accessgraph/domains/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any accessgraph module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOCAL_DEVELOPMENT", "true")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test_user")
os.environ.setdefault("POSTGRES_PASSWORD", "test_password")
os.environ.setdefault("POSTGRES_DB", "test_db")


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_entity_repo():
    """Fake EntityRepository backed by a set."""
    from accessgraph.domains.memberships.fakes.repository import FakeEntityRepository

    return FakeEntityRepository()


@pytest.fixture
def fake_membership_repo():
    """Fake MembershipRepository backed by an adjacency dict."""
    from accessgraph.domains.memberships.fakes.repository import FakeMembershipRepository

    return FakeMembershipRepository()


@pytest.fixture
def fake_object_permission_repo():
    """Fake ObjectPermissionRepository backed by a list of rows."""
    from accessgraph.domains.permissions.fakes.repository import FakeObjectPermissionRepository

    return FakeObjectPermissionRepository()


@pytest.fixture
def fake_system_permission_repo():
    """Fake SystemPermissionRepository backed by a set of rows."""
    from accessgraph.domains.permissions.fakes.repository import FakeSystemPermissionRepository

    return FakeSystemPermissionRepository()


@pytest.fixture
def test_settings():
    """Settings with the out-of-the-box inheritance behaviour."""
    from accessgraph.core.config import Settings

    return Settings(
        PERMISSION_INHERITANCE_DEFAULT=True,
        USER_GROUP_INHERITANCE_ENABLED=True,
    )


# ---------------------------------------------------------------------------
# Services wired to fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def resolver(fake_entity_repo, fake_membership_repo):
    """GroupClosureResolver over the fake repositories."""
    from accessgraph.domains.memberships.resolver import GroupClosureResolver

    return GroupClosureResolver(entity_repo=fake_entity_repo, membership_repo=fake_membership_repo)


@pytest.fixture
def evaluator(resolver, fake_object_permission_repo, fake_system_permission_repo, test_settings):
    """PermissionEvaluator over the fake repositories."""
    from accessgraph.domains.permissions.evaluator import PermissionEvaluator

    return PermissionEvaluator(
        resolver=resolver,
        object_permission_repo=fake_object_permission_repo,
        system_permission_repo=fake_system_permission_repo,
        settings=test_settings,
    )


@pytest.fixture
def test_container(
    fake_entity_repo,
    fake_membership_repo,
    fake_object_permission_repo,
    fake_system_permission_repo,
    resolver,
    evaluator,
):
    """A Container with all fakes, for tests that need the full graph of services."""
    from accessgraph.core.container import Container
    from accessgraph.domains.access_policy.guard import AccessPolicyGuard
    from accessgraph.domains.memberships.service import EntityService

    return Container(
        entity_repo=fake_entity_repo,
        membership_repo=fake_membership_repo,
        object_permission_repo=fake_object_permission_repo,
        system_permission_repo=fake_system_permission_repo,
        entity_service=EntityService(entity_repo=fake_entity_repo),
        group_closure_resolver=resolver,
        permission_evaluator=evaluator,
        access_policy_guard=AccessPolicyGuard(evaluator=evaluator),
    )
