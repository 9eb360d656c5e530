"""Main blueprint: health check."""
from flask import Blueprint, jsonify
from sqlalchemy import text
from cotizador.database import get_session
from cotizador.domain.taxes import supported_tax_codes
from cotizador.models import Component, Supplier

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """
    Report database connectivity and what the quoter can work with.

    Returns:
        200: Healthy, with catalog sizes and supported tax codes
        500: Database unreachable
    """
    try:
        session = get_session()
        session.execute(text("SELECT 1"))
        components = session.query(Component).count()
        suppliers = session.query(Supplier).count()
    except Exception as e:
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
            'error': str(e),
        }), 500

    return jsonify({
        'status': 'healthy',
        'database': 'connected',
        'catalog': {'components': components, 'suppliers': suppliers},
        'tax_codes': supported_tax_codes(),
    }), 200
