"""User use cases."""

from .archive_user import ArchiveUserUseCase
from .create_user import CreateUserUseCase
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListArchivedUsersUseCase, ListUsersUseCase
from .update_user import UpdateProfileUseCase, UpdateUserUseCase

__all__ = [
    "ArchiveUserUseCase",
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListArchivedUsersUseCase",
    "ListUsersUseCase",
    "UpdateProfileUseCase",
    "UpdateUserUseCase",
]
