"""Client (tenant) ORM model and the client_member association table."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Table, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nexus_obra.infrastructure.persistence.database import Base
from nexus_obra.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from nexus_obra.infrastructure.persistence.models.user import User

# Composite primary key gives the member collection set semantics.
client_member = Table(
    "client_member",
    Base.metadata,
    Column(
        "client_id",
        String,
        ForeignKey("client.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Client(CuidMixin, TimestampMixin, Base):
    """Root tenant entity. Table: client.

    client_name is stored trimmed and lowercased, so its unique constraint is
    case-insensitive. Email and phone are unique among non-null values only.
    """

    __tablename__ = "client"

    client_name: Mapped[str] = mapped_column(String, nullable=False)
    client_email: Mapped[str | None] = mapped_column(String, nullable=True)
    client_phone: Mapped[str | None] = mapped_column(String, nullable=True)
    client_logo: Mapped[str | None] = mapped_column(String, nullable=True)
    client_admin_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", use_alter=True, name="fk_client_admin_id_app_user"),
        nullable=False,
    )
    sub_status: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    members: Mapped[list[User]] = relationship(
        User,
        secondary=client_member,
        lazy="selectin",
        order_by=User.username,
    )

    __table_args__ = (
        UniqueConstraint("client_name", name="uq_client_client_name"),
        UniqueConstraint("client_email", name="uq_client_client_email"),
        UniqueConstraint("client_phone", name="uq_client_client_phone"),
    )

    @property
    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]
