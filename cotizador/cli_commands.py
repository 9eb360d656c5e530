"""
Flask CLI commands.

Commands:
- flask init-db: Create all tables
- flask show-promotion: Evaluate a stored promotion for a quantity and price
"""

import click
from cotizador.database import create_all, get_session
from cotizador.exceptions import CotizadorError
from cotizador.utils.number_format import to_decimal


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create the quoting and ordering tables."""
        create_all()
        click.echo(click.style('✅ Tablas creadas.', fg='green'))

    @app.cli.command('show-promotion')
    @click.argument('promotion_id', type=int)
    @click.option('--quantity', default=1, show_default=True, type=int, help='Units to quote')
    @click.option('--price', required=True, help='Unit base price, e.g. 1500.00')
    def show_promotion(promotion_id, quantity, price):
        """Print a promotion chain and the amount it yields."""
        from cotizador.services.catalog_service import SqlCatalog

        try:
            base_price = to_decimal(price, 'precio')
        except ValueError:
            click.echo(click.style(f'❌ Precio inválido: {price}', fg='red'))
            return

        try:
            promotion = SqlCatalog(get_session()).find_promotion(promotion_id)
        except CotizadorError as e:
            click.echo(click.style(f'❌ {e.message}', fg='red'))
            return

        if promotion is None:
            click.echo(click.style(f'❌ Promoción {promotion_id} no encontrada.', fg='red'))
            return

        amount = promotion.calculate_amount(quantity, base_price)
        click.echo(f'Promoción: {promotion.name} ({promotion.describe()})')
        click.echo(f'Vigente hoy: {"sí" if promotion.is_active() else "no"}')
        click.echo(f'Importe {quantity} x {base_price}: {amount:.2f}')
        click.echo(f'Ahorro: {promotion.savings(quantity, base_price):.2f}')
