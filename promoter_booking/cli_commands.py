"""
Flask CLI commands.

Commands:
- flask init-db: Create every table
- flask seed-demo: Populate an empty database with demo data
- flask order-status: Move an order along the status machine
"""
import click

from promoter_booking import database
from promoter_booking.exceptions import BookingError
from promoter_booking.models import OrderStatus
from promoter_booking.services.order_service import transition_order_status
from promoter_booking.services.seed_service import seed_demo_data
from promoter_booking.utils.formatters import num_br


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables first')
    def init_db_command(drop):
        """Create the database tables."""
        if drop:
            click.confirm('Isto apaga todos os dados. Continuar?', abort=True)
            database.drop_all()
            click.echo(click.style('Tabelas removidas.', fg='yellow'))

        database.create_all()
        click.echo(click.style('✅ Tabelas criadas.', fg='green', bold=True))

    @app.cli.command('seed-demo')
    def seed_demo_command():
        """Populate the database with demo periods, a client and promoters."""
        db_session = database.get_session()
        try:
            result = seed_demo_data(db_session)
        except Exception as e:
            click.echo(click.style(f'❌ Erro ao popular banco de dados: {e}', fg='red'))
            raise SystemExit(1)

        if 'skipped' in result:
            click.echo(click.style(
                f"Banco já possui {num_br(result['skipped'])} promotores. Seed ignorado.", fg='yellow'
            ))
            return

        click.echo(click.style('\n✅ Banco de dados populado com sucesso!', fg='green', bold=True))
        click.echo(f"   Períodos: {num_br(result['periods'])}")
        click.echo(f"   Promotores: {num_br(result['promoters'])}")

    @app.cli.command('order-status')
    @click.argument('order_id', type=int)
    @click.argument('status', type=click.Choice([s.value for s in OrderStatus]))
    def order_status_command(order_id, status):
        """Change the status of an order (e.g. pending -> confirmed)."""
        db_session = database.get_session()
        try:
            order = transition_order_status(db_session, order_id, status)
        except BookingError as e:
            click.echo(click.style(f'❌ {e.message}', fg='red'))
            raise SystemExit(1)

        click.echo(click.style(
            f'✅ Pedido #{order.id}: {order.status_enum.label}', fg='green'
        ))
