
import click
from flask import current_app

from strengthlab.services import build_services
from strengthlab.services.base import ProgramRules


def register_commands(app):
    @app.cli.command("refresh-stats")
    @click.option("--user-id", type=int, default=None, help="Only refresh this user.")
    def refresh_stats(user_id):
        """Recompute UserStat rows for every student."""
        stats = build_services().stats.refresh_all(user_id)
        click.echo(f"Refreshed {len(stats)} user stat row(s).")

    @app.cli.command("recalculate-progress")
    @click.argument("user_id", type=int)
    def recalculate_progress(user_id):
        """Rebuild a user's progress tracking from their test results."""
        if build_services().progress.recalculate_all(user_id):
            click.echo(f"Progress rebuilt for user {user_id}.")
        else:
            click.echo(f"User {user_id} has no test results.")

    @app.cli.command("seed-block")
    @click.argument("block_number", type=int)
    @click.argument("start_date", type=click.DateTime(formats=["%Y-%m-%d"]))
    def seed_block(block_number, start_date):
        """Create a standard block starting on START_DATE (YYYY-MM-DD)."""
        from strengthlab.seed import create_block

        block = create_block(
            block_number,
            start_date.date(),
            weeks=current_app.config["BLOCK_WEEKS"],
            rules=ProgramRules.from_config(current_app.config),
        )
        click.echo(f"Created {block.name}: {block.duration_in_weeks} weeks, {len(block.sessions)} sessions.")
