"""Seed the mood-type catalog and a demo account.

Usage:
    flask seed-mood-types
    flask seed-demo
    flask seed-demo --email someone@example.com --password secret123
"""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from ventdiary.core.users.models import User
from ventdiary.core.users.services import create_user, get_user_by_email
from ventdiary.domains.moods.catalog import seed_mood_types

logger = logging.getLogger(__name__)

DEMO_NAME = "Jane Doe"
DEMO_EMAIL = "jane.doe@example.com"
DEMO_PASSWORD = "Password123!"


def seed_demo_user(email: str = DEMO_EMAIL, password: str = DEMO_PASSWORD, name: str = DEMO_NAME) -> User:
    user = get_user_by_email(email)
    if user:
        return user
    user = create_user(name=name, email=email, password=password)
    logger.info("Demo user %s created", user.email)
    return user


@click.command("seed-mood-types")
@with_appcontext
def seed_mood_types_command():
    """Create or refresh the default mood types."""
    created, updated = seed_mood_types()
    click.echo(f"Mood types: {created} created, {updated} updated")


@click.command("seed-demo")
@click.option("--email", default=DEMO_EMAIL, show_default=True, help="Demo account email")
@click.option("--password", default=DEMO_PASSWORD, show_default=True, help="Demo account password")
@click.option("--name", default=DEMO_NAME, show_default=True, help="Demo display name")
@with_appcontext
def seed_demo_command(email: str, password: str, name: str):
    """Seed mood types plus a demo user."""
    seed_mood_types()
    user = seed_demo_user(email.strip().lower(), password, name)
    click.echo(f"Seeded demo user {user.email} (id={user.id})")
