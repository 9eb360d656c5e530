"""Quotes blueprint: JSON endpoints for cotizaciones."""
from flask import Blueprint, current_app, jsonify, request
from cotizador.database import get_session
from cotizador.exceptions import BusinessLogicError
from cotizador.services.quote_service import create_quote, load_quote

quotes_bp = Blueprint('quotes', __name__, url_prefix='/quotes')


@quotes_bp.route('', methods=['POST'])
def create():
    """
    Create a quote.

    Body: ``{"lines": [{"component_id": "MON-01", "quantity": 2}], "tax_codes": ["MX"]}``
    """
    payload = request.get_json(silent=True) or {}
    lines = payload.get('lines')
    if not isinstance(lines, list):
        raise BusinessLogicError('Se requiere la lista "lines".')
    tax_codes = payload.get('tax_codes') or []
    if isinstance(tax_codes, str):
        tax_codes = [tax_codes]

    quote = create_quote(
        get_session(),
        lines,
        tax_codes=tax_codes,
        default_tax_codes=current_app.config.get('DEFAULT_TAX_CODES', ['MX']),
    )
    return jsonify(quote.to_dict()), 201


@quotes_bp.route('/<int:folio>')
def detail(folio):
    """View a saved quote."""
    quote = load_quote(get_session(), folio)
    return jsonify(quote.to_dict())
