"""Pick the output mode for a ServiceResult.

The CLI prints a result as Rich text for humans, as a single status line
with ``--quiet``, or as JSON with ``--json``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dentalctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Global output flags taken from the root CLI group."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over ``quiet``; ``quiet`` wins over the Rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from dentalctl.output.renderers import render_quiet, render_result

    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
