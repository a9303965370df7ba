"""BaseService — shared foundation for dentalctl services.

Every service receives the resolved :class:`DentalSettings` at construction
time and reads its section (timing, lockout, access, validation) from it.
Domain errors are caught at the service boundary and reported as a failed
:class:`ServiceResult`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dentalctl.services.result import ServiceResult

if TYPE_CHECKING:
    from dentalctl.config.settings import DentalSettings
    from dentalctl.domain.errors import DentalError

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class AccessService(BaseService):
            def check(self, roles, permissions) -> ServiceResult:
                resolver = build_resolver(self._settings.access)
                ...
    """

    def __init__(self, settings: DentalSettings | None = None) -> None:
        if settings is None:
            from dentalctl.config.settings import DentalSettings

            settings = DentalSettings()
        self._settings = settings

    @property
    def settings(self) -> DentalSettings:
        return self._settings

    def _fail(self, op: str, exc: DentalError, **data: object) -> ServiceResult:
        logger.debug("%s failed: %s (%s)", op, exc.message, exc.code)
        return ServiceResult.failure(op, exc, **data)
