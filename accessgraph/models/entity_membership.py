"""Direct membership edge between a member entity and a user group."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from accessgraph.models._base import Base


class EntityMembership(Base):
    """Directed edge: ``member_entity`` is a member of ``group_entity``.

    Examples:
    - User-to-group: (user "alice") -> (group "frontend")
    - Group-to-group: (group "frontend") -> (group "engineering")

    Cycles are allowed; the closure resolver tolerates them.
    """

    __tablename__ = "entity_membership"

    group_entity_id: Mapped[UUID] = mapped_column(
        ForeignKey("entity.id", ondelete="CASCADE"), nullable=False
    )
    member_entity_id: Mapped[UUID] = mapped_column(
        ForeignKey("entity.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("group_entity_id", "member_entity_id", name="uq_entity_membership"),
        # Closure walks upward: member -> groups
        Index("idx_entity_membership_member", "member_entity_id"),
    )
