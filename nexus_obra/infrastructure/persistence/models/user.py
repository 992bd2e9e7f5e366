"""User ORM model. Global username; optional client (tenant) membership."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from nexus_obra.domain.enums import Role
from nexus_obra.infrastructure.persistence.database import Base
from nexus_obra.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """Table: app_user. Deleting a client sets client_id to NULL; the user survives."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String, nullable=False, default=Role.USER.value, server_default=Role.USER.value
    )
    client_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("client.id", ondelete="SET NULL", name="fk_app_user_client_id"),
        nullable=True,
        index=True,
    )
    reset_password: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_app_user_username"),
        CheckConstraint(
            "role IN ({})".format(", ".join(f"'{v}'" for v in Role.values())),
            name="app_user_role_check",
        ),
        # masterAdmin never belongs to a client
        CheckConstraint(
            f"NOT (role = '{Role.MASTER_ADMIN.value}' AND client_id IS NOT NULL)",
            name="app_user_master_admin_no_client",
        ),
    )
