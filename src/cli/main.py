"""BuildLink CLI (Typer).

Root app: session commands (login/register/logout/whoami) plus one sub-app per
area of the platform.
"""

from __future__ import annotations

from typing import Optional

import typer

from cli import doctor, hiring, materials, milestones, projects, users, worker_requests
from cli.runtime import console, get_settings, get_token_store, run_action
from cli.ui_components import build_user_panel, print_banner
from core.domain.forms import LoginForm, RegistrationForm, build_form
from core.domain.models import UserType, WorkerType
from core.errors import NETWORK_ERROR_MESSAGE
from core.logging_config import setup_logging
from core.services import workflows
from core.services.project_views import home_area

app = typer.Typer(
    no_args_is_help=True,
    help="BuildLink: construction projects, materials, milestones and hiring from the terminal.",
)
app.add_typer(projects.app, name="projects")
app.add_typer(materials.app, name="materials")
app.add_typer(milestones.app, name="milestones")
app.add_typer(hiring.app, name="hire")
app.add_typer(worker_requests.app, name="requests")
app.add_typer(users.app, name="users")
app.add_typer(doctor.app, name="doctor")

_AREA_HINTS = {
    UserType.ADMIN: "Admin area: `buildlink materials`, `buildlink users`.",
    UserType.WORKER: "Worker area: `buildlink projects list --worker`, `buildlink requests list`.",
    UserType.USER: "Client area: `buildlink projects`, `buildlink hire`, `buildlink milestones`.",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (HTTP requests included)."),
    banner: bool = typer.Option(False, "--banner", help="Show the welcome banner."),
) -> None:
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_file)
    if banner:
        print_banner(console)


@app.command()
def login(
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    user_type: UserType = typer.Option(UserType.USER, "--as", case_sensitive=False, help="Login as user, worker or admin."),
) -> None:
    """Sign in and store the session token."""

    store = get_token_store()

    async def _action(api):
        form = build_form(LoginForm, username=username, password=password, user_type=user_type)
        return await workflows.login(api, store, form)

    result = run_action(_action, failure=NETWORK_ERROR_MESSAGE, title="Login Failed")
    console.print(f"[green]Welcome {result.user.username or username}![/green]")
    console.print(_AREA_HINTS[home_area(result.user)], style="dim")


@app.command()
def register(
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    email: str = typer.Option(..., "--email", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True),
    user_type: UserType = typer.Option(UserType.USER, "--type", case_sensitive=False, help="user or worker."),
    sub_user_type: Optional[WorkerType] = typer.Option(
        None, "--trade", case_sensitive=False, help="Worker trade (only for --type worker)."
    ),
) -> None:
    """Create a client or worker account."""

    async def _action(api):
        form = build_form(
            RegistrationForm,
            username=username,
            email=email,
            password=password,
            user_type=user_type,
            sub_user_type=sub_user_type,
        )
        return await api.register(form)

    run_action(_action, failure="Registration failed")
    console.print("[green]Registration successful![/green] You can now run `buildlink login`.")


@app.command()
def logout() -> None:
    """Forget the stored session token."""

    get_token_store().clear()
    console.print("[green]Logged out.[/green]")


@app.command()
def whoami() -> None:
    """Show the signed-in account."""

    user = run_action(lambda api: api.me(), failure="Failed to fetch user details")
    console.print(build_user_panel(user))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
