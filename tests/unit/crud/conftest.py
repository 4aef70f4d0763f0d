"""In-memory SQLite database for crud and repository tests."""

from typing import AsyncIterator, Dict

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from accessgraph.core.shared_models import (
    EntityKind,
    ObjectKind,
    ObjectPermissionType,
    SystemPermissionType,
)
from accessgraph.models import Base, Entity, EntityMembership, ObjectPermission, SystemPermission


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh schema per test on a single shared in-memory connection."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Let SQLAlchemy emit BEGIN itself so SAVEPOINT works under the sqlite driver.
    @event.listens_for(eng.sync_engine, "connect")
    def _sqlite_pragmas(dbapi_conn, _):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(eng.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session bound to the test database; rolled back at the end."""
    maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
        await session.rollback()


class GraphBuilder:
    """Seeds entities, memberships and grants as ORM rows."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._entities: Dict[tuple, Entity] = {}

    async def entity(self, name: str, kind: EntityKind = EntityKind.USER) -> Entity:
        key = (name, kind)
        if key not in self._entities:
            row = Entity(name=name, type=kind)
            self.db.add(row)
            await self.db.flush()
            self._entities[key] = row
        return self._entities[key]

    async def user(self, name: str) -> Entity:
        return await self.entity(name, EntityKind.USER)

    async def group(self, name: str) -> Entity:
        return await self.entity(name, EntityKind.USER_GROUP)

    async def member_of(self, member: Entity, *group_names: str) -> None:
        for name in group_names:
            group = await self.group(name)
            self.db.add(EntityMembership(group_entity_id=group.id, member_entity_id=member.id))
        await self.db.flush()

    async def grant(
        self,
        holder: Entity,
        object_kind: ObjectKind,
        permission: ObjectPermissionType,
        object_identifier: str,
    ) -> None:
        self.db.add(
            ObjectPermission(
                entity_id=holder.id,
                object_kind=object_kind,
                permission=permission,
                object_identifier=object_identifier,
            )
        )
        await self.db.flush()

    async def grant_system(self, holder: Entity, permission: SystemPermissionType) -> None:
        self.db.add(SystemPermission(entity_id=holder.id, permission=permission))
        await self.db.flush()


@pytest.fixture
def graph(db: AsyncSession) -> GraphBuilder:
    """Row builder bound to the test session."""
    return GraphBuilder(db)
