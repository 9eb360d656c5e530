"""Orders blueprint: generate supplier orders (pedidos) from saved quotes."""
from datetime import date
from flask import Blueprint, current_app, jsonify, request
from cotizador.database import get_session
from cotizador.exceptions import BusinessLogicError
from cotizador.services.order_service import generate_order_from_quote, load_order

orders_bp = Blueprint('orders', __name__, url_prefix='/orders')


def _parse_date(value, field):
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise BusinessLogicError(f'Fecha inválida en {field}: {value}. Usá AAAA-MM-DD.')


@orders_bp.route('', methods=['POST'])
def create():
    """
    Generate an order.

    Body: ``{"quote_folio": 1, "supplier_key": "PROV-01", "fulfillment_level": 100,
    "issue_date": "2026-01-10", "delivery_date": "2026-01-17"}``
    """
    payload = request.get_json(silent=True) or {}
    try:
        quote_folio = int(payload['quote_folio'])
    except (KeyError, TypeError, ValueError):
        raise BusinessLogicError('Se requiere "quote_folio" numérico.')
    supplier_key = (payload.get('supplier_key') or '').strip()
    if not supplier_key:
        raise BusinessLogicError('Se requiere "supplier_key".')

    fulfillment_level = payload.get('fulfillment_level', current_app.config.get('DEFAULT_FULFILLMENT_LEVEL', 100))
    if isinstance(fulfillment_level, str) and fulfillment_level.strip().isdigit():
        fulfillment_level = int(fulfillment_level)

    order = generate_order_from_quote(
        get_session(),
        quote_folio,
        supplier_key,
        fulfillment_level=fulfillment_level,
        issue_date=_parse_date(payload.get('issue_date'), 'issue_date'),
        delivery_date=_parse_date(payload.get('delivery_date'), 'delivery_date'),
        delivery_days=current_app.config.get('ORDER_DELIVERY_DAYS', 7),
    )
    return jsonify(order.to_dict()), 201


@orders_bp.route('/<int:number>')
def detail(number):
    """View a saved order."""
    order = load_order(get_session(), number)
    return jsonify(order.to_dict())
