"""SQLAlchemy models for the ContentBase system tables.

These tables belong to the authentication/authorization collaborator and
are created on startup in development mode. Collection tables are not
modelled here.
"""

from contentbase.infrastructure.persistence.models.junctions import (
    RolesPermissionsModel,
    UsersRolesModel,
)
from contentbase.infrastructure.persistence.models.permission import PermissionModel
from contentbase.infrastructure.persistence.models.role import RoleModel
from contentbase.infrastructure.persistence.models.user import UserModel

__all__ = [
    "PermissionModel",
    "RoleModel",
    "RolesPermissionsModel",
    "UserModel",
    "UsersRolesModel",
]
