"""Client-side permission checks. Display only: the backend enforces access."""

from typing import Iterable

from hire_purchase_portal.domain.models import AdminUser, User, UserType


def has_permission(user: User | None, user_type: UserType | None, permission: str) -> bool:
    if user_type is not UserType.ADMIN or not isinstance(user, AdminUser):
        return False
    return permission in user.permissions


def has_any_permission(user: User | None, user_type: UserType | None, permissions: Iterable[str]) -> bool:
    return any(has_permission(user, user_type, p) for p in permissions)


def has_all_permissions(user: User | None, user_type: UserType | None, permissions: Iterable[str]) -> bool:
    return all(has_permission(user, user_type, p) for p in permissions)
