"""SQLAlchemy model for the roles table.

Roles group permissions for the authorization collaborator. The collection
engine never reads or writes this table.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentbase.infrastructure.persistence.database import Base


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique role name.
        description: Optional description of the role's purpose.
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Role name (e.g., 'admin', 'editor')",
    )
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    users: Mapped[list["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        secondary="users_roles",
        back_populates="roles",
    )
    permissions: Mapped[list["PermissionModel"]] = relationship(  # noqa: F821
        "PermissionModel",
        secondary="roles_permissions",
        back_populates="roles",
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
