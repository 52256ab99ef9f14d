# Overview: Flask CLI command groups for bootstrap, catalog seeding, and record lookup.

# backend/repairdesk/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init
#   Create missing tables and seed the phone model catalog (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Phone model catalog:
# - python -m flask phone-models seed
#   Add the built-in model list; existing entries are kept.
# - python -m flask phone-models list [--brand Apple]
#
# Transactions:
# - python -m flask transactions search "0412 345 678" --limit 10
#   Rank active records the way the dashboard does.
# - python -m flask transactions invoice 42
#   Print line items and GST breakdown for one record.

import click
from flask.cli import with_appcontext

from .extensions import db
from .services import phone_model_service
from .services.invoice_service import compute_totals, money
from .services.search_service import search_transactions, score_record
from .services.transaction_service import get_transaction, TransactionNotFound


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """Create tables that do not exist yet and seed the phone model catalog."""
    click.echo("START Initializing repairdesk...")
    db.create_all()
    added = phone_model_service.seed_phone_models()
    click.echo(f"PASS Tables ready, {added} phone model(s) added.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system init' to seed.")


@click.group('phone-models')
def phone_models_group():
    """Phone model catalog commands."""


@phone_models_group.command('seed')
@with_appcontext
def seed_phone_models_cli():
    added = phone_model_service.seed_phone_models()
    click.echo(f"Seeded {added} phone models.")


@phone_models_group.command('list')
@click.option('--brand', help='Filter by brand')
@with_appcontext
def list_phone_models_cli(brand):
    models = phone_model_service.list_phone_models(brand=brand)
    if not models:
        click.echo("No phone models found.")
        return
    for m in models:
        flag = "" if m.is_active else " (inactive)"
        click.echo(f"{m.id:<5} {m.brand:<10} {m.model_name}{flag}")


@click.group('transactions')
def transactions_group():
    """Transaction lookup commands."""


@transactions_group.command('search')
@click.argument('query', default='')
@click.option('--limit', type=int, default=20, show_default=True)
@click.option('--store', 'store_code', help='Store code, e.g. EASTWOOD')
@with_appcontext
def search_cli(query, limit, store_code):
    """
    Example:
        flask transactions search "iphone 13"
        flask transactions search 26102023 --store PARRAMATTA
    """
    records = search_transactions(query, limit, store_code.upper() if store_code else None)
    if not records:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Score':<6} {'Date':<11} {'Customer':<25} {'Model'}")
    for r in records:
        score = score_record(r, query) if query.strip() else 0
        click.echo(f"{r.id:<6} {score:<6} {r.transaction_date.isoformat():<11} {r.customer_name:<25} {r.phone_model}")


@transactions_group.command('invoice')
@click.argument('transaction_id', type=int)
@with_appcontext
def invoice_cli(transaction_id):
    try:
        t = get_transaction(transaction_id)
    except TransactionNotFound as e:
        raise click.ClickException(str(e))

    totals = compute_totals(t.to_record())
    click.echo(f"Invoice #: {t.invoice_number or '-'}")
    for li in totals.line_items:
        click.echo(f"  {li.label:<50} ${money(li.amount)}")
    click.echo(f"  {'Subtotal':<50} ${money(totals.subtotal)}")
    click.echo(f"  {'GST (10%)':<50} ${money(totals.gst)}")
    click.echo(f"  {'Total':<50} ${money(totals.total)}")
    if totals.repair_total is not None:
        click.echo(f"  {'Repair Total':<50} ${money(totals.repair_total)}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(phone_models_group)
    app.cli.add_command(transactions_group)
