"""Delete expired refresh-token ledger rows.

Expiry is already enforced when a token is presented; this only keeps the
table small. Usage:
    flask purge-refresh-tokens
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from ventdiary.core.auth.token_repository import RefreshTokenRepository
from ventdiary.extensions import db


@click.command("purge-refresh-tokens")
@with_appcontext
def purge_refresh_tokens_command():
    """Remove refresh tokens whose expiry has passed."""
    removed = RefreshTokenRepository().purge_expired()
    db.session.commit()
    click.echo(f"Removed {removed} expired refresh token(s)")
