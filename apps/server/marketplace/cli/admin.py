"""Admin CLI commands for managing admin users."""

from typing import Optional

import typer

from marketplace.db.session import session_scope
from marketplace.services.exceptions import UserEmailAlreadyExistsError
from marketplace.services.users import ensure_admin_user

app = typer.Typer()


@app.callback()
def main() -> None:
    """Operator commands for the marketplace admin server."""


@app.command("create-admin")
def create_admin(
    email: str,
    password: Optional[str] = typer.Option(
        None,
        "--password",
        help="Password for a new account; ignored when promoting an existing one.",
    ),
    full_name: Optional[str] = typer.Option(None, "--full-name"),
):
    """Create an admin account, or grant the admin role to an existing one."""
    with session_scope() as db:
        try:
            _, created = ensure_admin_user(db, email, password, full_name=full_name)
        except (ValueError, UserEmailAlreadyExistsError) as e:
            typer.echo(f"Error: {e}")
            raise typer.Exit(code=1)

    if created:
        typer.echo(f"Admin account created for {email}")
    else:
        typer.echo(f"Admin role granted to existing user {email}")


if __name__ == "__main__":
    app()
