"""Entity model: a user or a user group."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from accessgraph.core.shared_models import EntityKind
from accessgraph.models._base import Base, enum_column_type


class Entity(Base):
    """Anything that can hold permissions or be a group member.

    ``name`` is unique within ``type``.
    """

    __tablename__ = "entity"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    type: Mapped[EntityKind] = mapped_column(
        enum_column_type(EntityKind, "entity_type"), nullable=False
    )

    __table_args__ = (UniqueConstraint("name", "type", name="uq_entity_name_type"),)
