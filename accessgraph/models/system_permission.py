"""System permission model."""

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from accessgraph.core.shared_models import SystemPermissionType
from accessgraph.models._base import Base, enum_column_type


class SystemPermission(Base):
    """System-wide permission granted to an entity."""

    __tablename__ = "system_permission"

    entity_id: Mapped[UUID] = mapped_column(
        ForeignKey("entity.id", ondelete="CASCADE"), nullable=False
    )
    permission: Mapped[SystemPermissionType] = mapped_column(
        enum_column_type(SystemPermissionType, "system_permission_type"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("entity_id", "permission", name="uq_system_permission"),
    )
