"""SQLAlchemy models for the users_roles and roles_permissions junction tables."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from contentbase.infrastructure.persistence.database import Base


class UsersRolesModel(Base):
    """Junction table between users and roles."""

    __tablename__ = "users_roles"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )

    def __repr__(self) -> str:
        return f"<UsersRoles(user_id={self.user_id}, role_id={self.role_id})>"


class RolesPermissionsModel(Base):
    """Junction table between roles and permissions."""

    __tablename__ = "roles_permissions"

    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    )

    def __repr__(self) -> str:
        return f"<RolesPermissions(role_id={self.role_id}, permission_id={self.permission_id})>"
