"""Roles, permissions, and the permission resolver.

The role → permission table is configuration, not state: a
:class:`PermissionResolver` is built once from an immutable table (the
default below, or one loaded from ``[access]`` settings) and only ever read.

Permission identifiers are ``resource:action`` strings.

INVARIANT: Resolution never raises. Missing access is ``False``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class Role(StrEnum):
    """Clinic user roles."""

    KEPALA_KLINIK = "kepala_klinik"
    DOKTER = "dokter"
    STAF = "staf"


class Permission(StrEnum):
    """Known permission identifiers."""

    # Appointments
    APPOINTMENTS_VIEW = "appointments:view"
    APPOINTMENTS_CREATE = "appointments:create"
    APPOINTMENTS_UPDATE = "appointments:update"
    APPOINTMENTS_DELETE = "appointments:delete"
    APPOINTMENTS_COMPLETE = "appointments:complete"
    APPOINTMENTS_CANCEL = "appointments:cancel"

    # Patients
    PATIENTS_VIEW = "patients:view"
    PATIENTS_CREATE = "patients:create"
    PATIENTS_UPDATE = "patients:update"
    PATIENTS_DELETE = "patients:delete"
    PATIENTS_RESTORE = "patients:restore"

    # Medical records
    MEDICAL_RECORDS_VIEW = "medical_records:view"
    MEDICAL_RECORDS_CREATE = "medical_records:create"
    MEDICAL_RECORDS_UPDATE = "medical_records:update"
    MEDICAL_RECORDS_DELETE = "medical_records:delete"
    MEDICAL_RECORDS_RESTORE = "medical_records:restore"
    MEDICAL_RECORDS_HARD_DELETE = "medical_records:hard_delete"

    # Payments & treatments
    PAYMENTS_VIEW = "payments:view"
    PAYMENTS_CREATE = "payments:create"
    PAYMENTS_UPDATE = "payments:update"
    TREATMENTS_VIEW = "treatments:view"
    TREATMENTS_MANAGE = "treatments:manage"

    # Users
    USERS_VIEW = "users:view"
    USERS_MANAGE = "users:manage"
    USERS_RESET_PASSWORD = "users:reset_password"

    # Notifications
    NOTIFICATIONS_VIEW = "notifications:view"
    NOTIFICATIONS_RETRY = "notifications:retry"
    NOTIFICATIONS_MANAGE_JOBS = "notifications:manage_jobs"

    # Roles & reports
    ROLES_VIEW = "roles:view"
    REPORTS_VIEW = "reports:view"

    # Own profile
    PROFILE_UPDATE = "profile:update"
    PROFILE_CHANGE_PASSWORD = "profile:change_password"


_SELF_SERVICE = (Permission.PROFILE_UPDATE, Permission.PROFILE_CHANGE_PASSWORD)

DEFAULT_ROLE_PERMISSIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        # Full access
        Role.KEPALA_KLINIK: frozenset(str(p) for p in Permission),
        # Clinical work: records and appointment outcomes
        Role.DOKTER: frozenset(
            {
                Permission.APPOINTMENTS_VIEW,
                Permission.APPOINTMENTS_COMPLETE,
                Permission.APPOINTMENTS_CANCEL,
                Permission.PATIENTS_VIEW,
                Permission.MEDICAL_RECORDS_VIEW,
                Permission.MEDICAL_RECORDS_CREATE,
                Permission.MEDICAL_RECORDS_UPDATE,
                Permission.TREATMENTS_VIEW,
                Permission.REPORTS_VIEW,
                *_SELF_SERVICE,
            }
        ),
        # Front desk: registration, scheduling, cashier
        Role.STAF: frozenset(
            {
                Permission.APPOINTMENTS_VIEW,
                Permission.APPOINTMENTS_CREATE,
                Permission.APPOINTMENTS_UPDATE,
                Permission.APPOINTMENTS_DELETE,
                Permission.APPOINTMENTS_CANCEL,
                Permission.PATIENTS_VIEW,
                Permission.PATIENTS_CREATE,
                Permission.PATIENTS_UPDATE,
                Permission.MEDICAL_RECORDS_VIEW,
                Permission.PAYMENTS_VIEW,
                Permission.PAYMENTS_CREATE,
                Permission.PAYMENTS_UPDATE,
                Permission.TREATMENTS_VIEW,
                Permission.NOTIFICATIONS_VIEW,
                Permission.NOTIFICATIONS_RETRY,
                *_SELF_SERVICE,
            }
        ),
    }
)

DEFAULT_ROLE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "kepala klinik": Role.KEPALA_KLINIK,
        "kepala-klinik": Role.KEPALA_KLINIK,
        "staff": Role.STAF,
    }
)


class PermissionResolver:
    """Answer "does any of these roles grant that permission?".

    Args:
        table: Role name → permission identifiers. Copied into frozensets
            behind a read-only mapping, so later changes to the caller's
            dict have no effect.
        aliases: Alternative spellings mapped to canonical role names.
    """

    def __init__(
        self,
        table: Mapping[str, Iterable[str]] | None = None,
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        source = DEFAULT_ROLE_PERMISSIONS if table is None else table
        self._table: Mapping[str, frozenset[str]] = MappingProxyType(
            {str(role).strip().lower(): frozenset(str(p) for p in perms) for role, perms in source.items()}
        )
        alias_source = DEFAULT_ROLE_ALIASES if aliases is None else aliases
        self._aliases: Mapping[str, str] = MappingProxyType(
            {alias.strip().lower(): str(role) for alias, role in alias_source.items()}
        )

    @property
    def roles(self) -> list[str]:
        return list(self._table)

    @property
    def table(self) -> Mapping[str, frozenset[str]]:
        return self._table

    def normalize_role(self, role: str) -> str | None:
        """Canonical role name for *role*, or None if it is not in the table."""
        if not role or not isinstance(role, str):
            return None
        key = role.strip().lower()
        key = self._aliases.get(key, key)
        return key if key in self._table else None

    def resolve_roles(self, roles: Iterable[str] | None) -> list[str]:
        """Canonical names of the recognized *roles*, in order, without repeats.

        Each unrecognized role is logged once per call and otherwise ignored.
        """
        resolved: list[str] = []
        unknown: list[str] = []
        for role in roles or ():
            canonical = self.normalize_role(role)
            if canonical is None:
                if role not in unknown:
                    unknown.append(role)
            elif canonical not in resolved:
                resolved.append(canonical)
        for role in unknown:
            logger.warning("Unrecognized role: %s", role)
        return resolved

    def _granted(self, roles: Iterable[str] | None) -> frozenset[str]:
        granted: set[str] = set()
        for canonical in self.resolve_roles(roles):
            granted |= self._table[canonical]
        return frozenset(granted)

    def has_permission(self, roles: Iterable[str] | None, permission: str) -> bool:
        """True iff any role in *roles* grants *permission*. No roles → False."""
        return str(permission) in self._granted(roles)

    def has_any_permission(self, roles: Iterable[str] | None, permissions: Iterable[str]) -> bool:
        """True iff at least one of *permissions* is granted. Empty list → False."""
        granted = self._granted(roles)
        return any(str(p) in granted for p in permissions)

    def has_all_permissions(self, roles: Iterable[str] | None, permissions: Iterable[str]) -> bool:
        """True iff every one of *permissions* is granted.

        An empty *permissions* list requires nothing and is vacuously True,
        even for a user with no roles.
        """
        granted = self._granted(roles)
        return all(str(p) in granted for p in permissions)

    def permissions_for_roles(self, roles: Iterable[str] | None) -> list[str]:
        """Union of the permissions of every recognized role, sorted."""
        return sorted(self._granted(roles))

    def has_role(self, user_roles: Iterable[str] | None, required_roles: Iterable[str] | None) -> bool:
        """Route-guard check: no requirement allows all; otherwise any overlap.

        An explicit empty requirement matches nobody.
        """
        if required_roles is None:
            return True
        held = set(self.resolve_roles(user_roles))
        return bool(held.intersection(self.resolve_roles(required_roles)))


_default_resolver = PermissionResolver()


def default_resolver() -> PermissionResolver:
    """Resolver over the built-in clinic role table."""
    return _default_resolver


def has_permission(roles: Iterable[str] | None, permission: str) -> bool:
    return _default_resolver.has_permission(roles, permission)


def has_any_permission(roles: Iterable[str] | None, permissions: Iterable[str]) -> bool:
    return _default_resolver.has_any_permission(roles, permissions)


def has_all_permissions(roles: Iterable[str] | None, permissions: Iterable[str]) -> bool:
    return _default_resolver.has_all_permissions(roles, permissions)
