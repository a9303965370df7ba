"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from dentalctl.output.console import (
    DENIED_MARK,
    GRANTED_MARK,
    create_console,
    get_output,
    style_for_role,
)

if TYPE_CHECKING:
    from rich.console import Console

    from dentalctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if "granted" in result.data:
        return "granted" if result.data["granted"] else "denied"
    if result.op == "list_permissions":
        return "\n".join(result.data.get("permissions", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "dental.ok"), (f"  {result.op}", "dental.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if isinstance(value, (dict, list)):
        text = _json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    else:
        text = str(value)
    console.print(Text.assemble((f"  {key}: ", "dental.key"), text))


def _mark(value: bool) -> Text:
    if value:
        return Text(GRANTED_MARK, style="dental.granted")
    return Text(DENIED_MARK, style="dental.denied")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if isinstance(v, (dict, list)):
            v = _json.dumps(v, separators=(",", ":"), ensure_ascii=False)
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "dental.error"), (f"  {result.op}", "dental.op"), ": ", msg)
    )

    errors = result.data.get("errors")
    if isinstance(errors, dict) and errors:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Field", style="dental.field", no_wrap=True)
        table.add_column("Message")
        for field, message in errors.items():
            table.add_row(field, message)
        console.print(table)

    for item in result.data.get("unmet", []):
        console.print(Text(f"  - {item}", style="dental.warning"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Access renderers ──────────────────────────────────────────────────


def _render_check_permission(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "roles", ", ".join(data.get("roles", [])) or "(none)")
    _field(console, "mode", data.get("mode", "all"))
    if data.get("granted"):
        verdict = ("granted", "dental.granted")
    else:
        verdict = ("denied", "dental.denied")
    console.print(Text.assemble(("  result: ", "dental.key"), verdict))

    per_permission: dict[str, bool] = data.get("permissions", {})
    if per_permission:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Permission", no_wrap=True)
        table.add_column("Held", justify="center")
        for permission, held in per_permission.items():
            table.add_row(permission, _mark(held))
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_list_permissions(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    _field(console, "roles", ", ".join(result.data.get("roles", [])) or "(none)")
    permissions = result.data.get("permissions", [])
    _field(console, "count", len(permissions))
    for permission in permissions:
        console.print(f"    {permission}")
    if verbose:
        _render_meta(console, result)


def _render_permission_matrix(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Permissions down the side, roles across the top."""
    roles: dict[str, list[str]] = result.data.get("roles", {})
    all_permissions = sorted({p for perms in roles.values() for p in perms})

    table = Table(title="Role permissions", show_header=True, pad_edge=False, expand=False)
    table.add_column("Permission", no_wrap=True)
    for role in roles:
        table.add_column(role, justify="center", header_style=style_for_role(role))

    previous_resource = None
    for permission in all_permissions:
        resource = permission.split(":", 1)[0]
        if previous_resource is not None and resource != previous_resource:
            table.add_section()
        previous_resource = resource
        table.add_row(permission, *(_mark(permission in perms) for perms in roles.values()))

    _status_line(console, result)
    console.print(table)
    if verbose:
        for role, perms in roles.items():
            _field(console, role, f"{len(perms)} permissions")


# ── Validation renderers ──────────────────────────────────────────────


def _render_record(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "schema", result.data.get("schema", ""))
    console.print(Text("  all fields valid", style="dental.granted"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check_permission": _render_check_permission,
    "list_permissions": _render_list_permissions,
    "permission_matrix": _render_permission_matrix,
    "validate_record": _render_record,
}
