"""Role resolution backed by configuration."""

from __future__ import annotations

from collections.abc import Iterable

from app.config import get_settings


class ConfiguredRoleOracle:
    """Treat the users listed in ``ADMIN_USER_IDS`` as organization admins."""

    def __init__(self, admin_user_ids: Iterable[str] | None = None) -> None:
        self._admin_user_ids = (
            frozenset(admin_user_ids) if admin_user_ids is not None else None
        )

    def is_admin(self, user_id: str, organization_id: str) -> bool:
        admins = self._admin_user_ids
        if admins is None:
            admins = get_settings().admin_user_id_set
        return bool(user_id) and user_id in admins


default_role_oracle = ConfiguredRoleOracle()


__all__ = ["ConfiguredRoleOracle", "default_role_oracle"]
