"""CLI for per-user entitlements.

Usage:
    flask grant-category someone@example.com BISRAT
    flask revoke-category someone@example.com BISRAT
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from ventdiary.core.users.entitlements import ENTRY_CATEGORY, grant, revoke
from ventdiary.core.users.services import get_user_by_email


def _user_or_abort(email: str):
    user = get_user_by_email(email)
    if not user:
        raise click.ClickException(f"No user with email {email}")
    return user


@click.command("grant-category")
@click.argument("email")
@click.argument("category")
@with_appcontext
def grant_category_command(email: str, category: str):
    """Unlock an extra journal CATEGORY for the user with EMAIL."""
    user = _user_or_abort(email)
    value = category.strip().upper()
    grant(user, ENTRY_CATEGORY, value)
    click.echo(f"Granted category {value} to {user.email}")


@click.command("revoke-category")
@click.argument("email")
@click.argument("category")
@with_appcontext
def revoke_category_command(email: str, category: str):
    """Remove an extra journal CATEGORY from the user with EMAIL."""
    user = _user_or_abort(email)
    value = category.strip().upper()
    if revoke(user, ENTRY_CATEGORY, value):
        click.echo(f"Revoked category {value} from {user.email}")
    else:
        click.echo(f"{user.email} did not have category {value}")
