"""
Management commands for inspecting custom ID formats
"""
import asyncio

import click
from flask.cli import AppGroup

from .services.custom_id import CorruptTemplate, CustomIdGenerator, InventoryNotFound

custom_id_cli = AppGroup('custom-id', help='Preview and check inventory custom IDs.')


@custom_id_cli.command('preview')
@click.argument('inventory_id')
@click.option('--count', default=1, show_default=True, type=click.IntRange(1, 100),
              help='Number of identifiers to generate.')
def preview_command(inventory_id, count):
    """Generate identifiers for an inventory without creating items"""
    generator = CustomIdGenerator.from_app()

    async def _generate():
        return [await generator.generate(inventory_id) for _ in range(count)]

    try:
        custom_ids = asyncio.run(_generate())
    except InventoryNotFound as exc:
        raise click.ClickException(str(exc))
    except CorruptTemplate as exc:
        raise click.ClickException(f"Custom ID format is corrupt: {exc}")

    for custom_id in custom_ids:
        click.echo(custom_id)


@custom_id_cli.command('check')
@click.argument('inventory_id')
@click.argument('candidate')
@click.option('--exclude', 'excluded_item_id', default=None, help='Item ID to ignore in the duplicate check.')
def check_command(inventory_id, candidate, excluded_item_id):
    """Validate a candidate identifier against an inventory"""
    generator = CustomIdGenerator.from_app()

    async def _check():
        template = await generator.load_template(inventory_id)
        valid = await generator.validate(candidate, inventory_id, excluded_item_id)
        pattern = generator.build_pattern(template) if template is not None else None
        return pattern, valid

    try:
        pattern, valid = asyncio.run(_check())
    except InventoryNotFound as exc:
        raise click.ClickException(str(exc))
    except CorruptTemplate as exc:
        raise click.ClickException(f"Custom ID format is corrupt: {exc}")

    if pattern is not None:
        click.echo(f"Pattern: {pattern}")
    else:
        click.echo("Pattern: (no format configured, any unique value is accepted)")

    if valid:
        click.echo(f"✅ {candidate!r} is valid")
    else:
        click.echo(f"❌ {candidate!r} is not valid")
        raise SystemExit(1)


def register_commands(app):
    """Register CLI commands"""
    app.cli.add_command(custom_id_cli)
