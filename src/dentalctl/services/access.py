"""AccessService — permission queries over the configured role table."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from dentalctl.domain.permissions import DEFAULT_ROLE_ALIASES, PermissionResolver
from dentalctl.services.base import BaseService
from dentalctl.services.result import ServiceResult

if TYPE_CHECKING:
    from dentalctl.config.models import AccessConfig
    from dentalctl.config.settings import DentalSettings


def build_resolver(access: AccessConfig) -> PermissionResolver:
    """Resolver for an ``[access]`` section.

    A non-empty ``roles`` table replaces the built-in one; ``aliases`` are
    added on top of the built-in aliases.
    """
    table = access.roles or None
    aliases = {**DEFAULT_ROLE_ALIASES, **access.aliases}
    return PermissionResolver(table, aliases)


class AccessService(BaseService):
    """Answer permission questions for a set of roles."""

    def __init__(
        self,
        settings: DentalSettings | None = None,
        *,
        resolver: PermissionResolver | None = None,
    ) -> None:
        super().__init__(settings)
        self._resolver = resolver or build_resolver(self._settings.access)

    @property
    def resolver(self) -> PermissionResolver:
        return self._resolver

    def check(
        self,
        roles: Iterable[str],
        permissions: Iterable[str],
        *,
        mode: str = "all",
    ) -> ServiceResult:
        """Decide whether *roles* hold *permissions* (``mode`` is ``all`` or ``any``)."""
        role_list = list(roles)
        wanted = list(permissions)
        resolved = self._resolver.resolve_roles(role_list)
        held = set(self._resolver.permissions_for_roles(resolved))
        per_permission = {p: p in held for p in wanted}
        if mode == "any":
            granted = any(per_permission.values())
        else:
            granted = all(per_permission.values())

        warnings = [
            f"Unknown role ignored: {role}"
            for role in dict.fromkeys(role_list)
            if self._resolver.normalize_role(role) is None
        ]
        return ServiceResult(
            ok=True,
            op="check_permission",
            data={
                "roles": role_list,
                "mode": mode,
                "granted": granted,
                "permissions": per_permission,
            },
            warnings=warnings,
            meta={"resolved_roles": resolved},
        )

    def permissions_for(self, roles: Iterable[str]) -> ServiceResult:
        role_list = list(roles)
        resolved = self._resolver.resolve_roles(role_list)
        return ServiceResult(
            ok=True,
            op="list_permissions",
            data={
                "roles": role_list,
                "permissions": self._resolver.permissions_for_roles(resolved),
            },
            meta={"resolved_roles": resolved},
        )

    def matrix(self) -> ServiceResult:
        """The full role → permissions table."""
        return ServiceResult(
            ok=True,
            op="permission_matrix",
            data={
                "roles": {
                    role: sorted(perms) for role, perms in self._resolver.table.items()
                }
            },
        )
