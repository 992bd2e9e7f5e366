"""Obra (project) ORM model and the obra_responsible association table."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nexus_obra.domain.enums import ObraStatus
from nexus_obra.infrastructure.persistence.database import Base
from nexus_obra.infrastructure.persistence.models.client import Client
from nexus_obra.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from nexus_obra.infrastructure.persistence.models.user import User

obra_responsible = Table(
    "obra_responsible",
    Base.metadata,
    Column(
        "obra_id",
        String,
        ForeignKey("obra.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Obra(CuidMixin, TimestampMixin, Base):
    """Project owned by a client. Table: obra.

    Deleting the owning client leaves the obra in place with client_id NULL
    (visible to masterAdmin only).
    """

    __tablename__ = "obra"

    obra_name: Mapped[str] = mapped_column(String, nullable=False)
    obra_description: Mapped[str | None] = mapped_column(String, nullable=True)
    obra_location: Mapped[str | None] = mapped_column(String, nullable=True)
    obra_status: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=ObraStatus.PLANNING.value,
        server_default=ObraStatus.PLANNING.value,
        index=True,
    )
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    budget: Mapped[float | None] = mapped_column(Float, nullable=True)
    client_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("client.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    client: Mapped[Client | None] = relationship(Client, lazy="selectin")
    responsible_users: Mapped[list[User]] = relationship(
        User,
        secondary=obra_responsible,
        lazy="selectin",
        order_by=User.username,
    )

    __table_args__ = (
        CheckConstraint(
            "obra_status IN ({})".format(
                ", ".join(f"'{v}'" for v in ObraStatus.values())
            ),
            name="obra_status_check",
        ),
        CheckConstraint("budget IS NULL OR budget >= 0", name="obra_budget_non_negative"),
    )
