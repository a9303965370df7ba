"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Holds the resolved settings, builds services on
demand, and owns result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dentalctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from dentalctl.config.settings import DentalSettings
    from dentalctl.services.access import AccessService
    from dentalctl.services.auth import AuthenticationService
    from dentalctl.services.result import ServiceResult
    from dentalctl.services.validation import ValidationService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: DentalSettings) -> None:
        self.settings = settings

        from dentalctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def validation(self) -> ValidationService:
        from dentalctl.services.validation import ValidationService

        return ValidationService(self.settings)

    def access(self) -> AccessService:
        from dentalctl.services.access import AccessService

        return AccessService(self.settings)

    def auth(self) -> AuthenticationService:
        from dentalctl.services.auth import AuthenticationService

        return AuthenticationService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they stay
          out of piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
