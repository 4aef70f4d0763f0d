"""Object permission model."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from accessgraph.core.shared_models import ObjectKind, ObjectPermissionType
from accessgraph.models._base import Base, enum_column_type


class ObjectPermission(Base):
    """Permission of one type granted to an entity on one object."""

    __tablename__ = "object_permission"

    entity_id: Mapped[UUID] = mapped_column(
        ForeignKey("entity.id", ondelete="CASCADE"), nullable=False
    )
    object_kind: Mapped[ObjectKind] = mapped_column(
        enum_column_type(ObjectKind, "object_kind"), nullable=False
    )
    permission: Mapped[ObjectPermissionType] = mapped_column(
        enum_column_type(ObjectPermissionType, "object_permission_type"), nullable=False
    )
    object_identifier: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "entity_id",
            "object_kind",
            "permission",
            "object_identifier",
            name="uq_object_permission",
        ),
        Index("idx_object_permission_object", "object_kind", "object_identifier"),
    )
