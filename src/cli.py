import click
from flask.cli import with_appcontext

from src.services.seed_service import seed_demo_data


@click.command("seed-demo")
@click.option("--flush", is_flag=True, help="Delete existing visits and appointments before seeding.")
@with_appcontext
def seed_demo_command(flush: bool):
    """Load demo patients and today's bookings."""
    stats = seed_demo_data(flush=flush)
    for key, value in stats.items():
        click.echo(f"{key:>22}: {value}")
