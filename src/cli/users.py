"""Admin user management."""

from __future__ import annotations

import typer

from cli.runtime import confirm_or_abort, console, run_action
from cli.ui_components import build_user_panel

app = typer.Typer(no_args_is_help=True, help="Inspect and delete user accounts (admin).")


@app.command()
def show(user_id: int = typer.Argument(..., help="User ID.")) -> None:
    user = run_action(lambda api: api.get_user(user_id), failure="Failed to fetch user details")
    console.print(build_user_panel(user))


@app.command()
def delete(
    user_id: int = typer.Argument(..., help="User ID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    confirm_or_abort("Are you sure you want to delete this user?", yes=yes)
    run_action(lambda api: api.delete_user(user_id), failure="Failed to delete user")
    console.print("[green]User deleted successfully[/green]")
