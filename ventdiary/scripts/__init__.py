"""Flask CLI commands."""


def register_commands(app):
    """Register CLI commands with the app."""
    from ventdiary.scripts.entitlements import grant_category_command, revoke_category_command
    from ventdiary.scripts.purge_tokens import purge_refresh_tokens_command
    from ventdiary.scripts.seed import seed_demo_command, seed_mood_types_command

    app.cli.add_command(seed_mood_types_command)
    app.cli.add_command(seed_demo_command)
    app.cli.add_command(grant_category_command)
    app.cli.add_command(revoke_category_command)
    app.cli.add_command(purge_refresh_tokens_command)
