"""
Integration tests for quoting and ordering against the database.
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from cotizador.models import (
    Component as ComponentModel, Order as OrderModel, PcPart, Promotion as PromotionModel,
    PromotionDetail, Quote as QuoteModel
)
from cotizador.services.catalog_service import SqlCatalog
from cotizador.services.order_service import generate_order_from_quote, load_order
from cotizador.services.quote_service import create_quote, load_quote, save_quote
from cotizador.exceptions import (
    ComponentNotFoundError, EmptyQuoteError, InvalidLineError, NotFoundError,
    QuoteFinalizedError, SupplierNotFoundError, UnsupportedTaxJurisdiction
)


@pytest.fixture
def discounted_pc(session, catalog):
    """PC-02 holds one part at 33.33 with 12.5% off, a unit price below the cent."""
    promotion = PromotionModel(name='12.5% gabinete')
    promotion.details.append(
        PromotionDetail(position=0, is_base=False, accumulable_type='DESCUENTO_PLANO',
                        flat_percent=Decimal('12.5'))
    )
    part = ComponentModel(id='SSD-01', description='SSD 512GB', cost=Decimal('20'),
                          base_price=Decimal('33.33'), component_type='SSD', promotion=promotion)
    pc = ComponentModel(id='PC-02', description='PC Compacta', component_type='PC')
    pc.parts.append(PcPart(component=part, position=0))
    session.add_all([promotion, part, pc])
    session.commit()
    return 'PC-02'


class TestSqlCatalog:
    """Tests for translating stored rows into domain objects."""

    def test_component_with_promotion(self, session, catalog):
        component = SqlCatalog(session).find_component('MON-01')

        assert component.base_price == Decimal('100')
        assert component.promotion.describe() == '3x2'
        assert component.quote_amount(3) == Decimal('200')

    def test_expired_promotion_not_attached(self, session, catalog):
        """Promotions outside their window price at list."""
        component = SqlCatalog(session).find_component('TV-01')
        assert component.promotion is None
        assert component.quote_amount(1) == Decimal('200')

    def test_expired_promotion_attached_inside_window(self, session, catalog):
        component = SqlCatalog(session, on_date=date(2019, 6, 1)).find_component('TV-01')
        assert component.quote_amount(1) == Decimal('100')

    def test_pc_parts(self, session, catalog):
        """A stored PC is rebuilt with its parts in position order."""
        pc = SqlCatalog(session).find_component('PC-01')

        assert pc.is_composite
        assert [part.id for part in pc.sub_components] == ['DD-01', 'RAM-01']
        assert pc.list_price() == Decimal('90')

    def test_find_promotion(self, session, catalog):
        promotion = SqlCatalog(session).find_promotion(catalog['tiered'])
        assert promotion.name == 'Volumen RAM'
        assert promotion.calculate_amount(5, 40) == Decimal('180')

    def test_missing_rows(self, session, catalog):
        lookups = SqlCatalog(session)
        assert lookups.find_component('NOPE') is None
        assert lookups.find_promotion(999) is None
        assert lookups.find_supplier('NOPE') is None


class TestQuoteService:
    """Tests for creating and loading quotes."""

    def test_create_quote(self, session, catalog):
        """Prices are computed, stored and a folio is assigned."""
        quote = create_quote(session, [
            {'component_id': 'MON-01', 'quantity': 3},
            {'component_id': 'DD-01', 'quantity': '2'},
        ], tax_codes=['MX'])

        assert quote.folio is not None
        assert quote.subtotal == Decimal('300.00')
        assert quote.tax_amount == Decimal('48.00')
        assert quote.total == Decimal('348.00')

        stored = session.query(QuoteModel).filter(QuoteModel.folio == quote.folio).first()
        assert stored.total == Decimal('348.00')
        assert stored.tax_codes == 'MX'
        assert [line.line_number for line in stored.lines] == [1, 2]

    def test_load_quote_matches_saved(self, session, catalog):
        """A reloaded quote keeps lines and totals and is read-only."""
        saved = create_quote(session, [{'component_id': 'RAM-01', 'quantity': 5}], tax_codes=['US'])
        loaded = load_quote(session, saved.folio)

        assert loaded.folio == saved.folio
        assert loaded.lines[0].amount == Decimal('180.00')
        assert loaded.total == Decimal('189.00')
        assert loaded.tax_codes == ['US']
        assert loaded.is_finalized

    def test_default_tax_codes(self, session, catalog):
        """No tax codes means the configured default."""
        quote = create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}], default_tax_codes=['CA'])
        assert quote.tax_codes == ['CA']
        assert quote.tax_amount == Decimal('7.50')

    def test_pc_quote(self, session, catalog):
        quote = create_quote(session, [{'component_id': 'PC-01', 'quantity': 2}], tax_codes=['MX'])
        assert quote.subtotal == Decimal('180.00')

    def test_nothing_saved_on_errors(self, session, catalog):
        """Failed requests leave no quote behind."""
        with pytest.raises(ComponentNotFoundError):
            create_quote(session, [{'component_id': 'NOPE', 'quantity': 1}])
        with pytest.raises(UnsupportedTaxJurisdiction):
            create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}], tax_codes=['ZZ'])
        with pytest.raises(InvalidLineError):
            create_quote(session, [{'component_id': 'DD-01', 'quantity': 1},
                                   {'component_id': 'MON-01', 'quantity': 0}])
        with pytest.raises(EmptyQuoteError):
            create_quote(session, [])

        assert session.query(QuoteModel).count() == 0

    def test_saved_quote_cannot_be_saved_again(self, session, catalog):
        quote = create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}])
        with pytest.raises(QuoteFinalizedError):
            save_quote(session, quote)

    def test_folios_increase(self, session, catalog):
        first = create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}])
        second = create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}])
        assert second.folio > first.folio

    def test_reloaded_line_prices_match_saved(self, session, discounted_pc):
        """Sub-cent part prices are rounded before saving, so reloading changes nothing."""
        saved = create_quote(session, [{'component_id': discounted_pc, 'quantity': 3}], tax_codes=['MX'])
        loaded = load_quote(session, saved.folio)

        assert saved.lines[0].unit_price == Decimal('29.16')
        assert loaded.lines[0].unit_price == saved.lines[0].unit_price
        assert loaded.lines[0].amount == saved.lines[0].amount
        assert loaded.to_dict() == saved.to_dict()

        order = generate_order_from_quote(session, saved.folio, 'PROV-01')
        assert order.lines[0].unit_price == saved.lines[0].unit_price

    def test_load_missing_quote(self, session):
        with pytest.raises(NotFoundError):
            load_quote(session, 12345)


class TestOrderService:
    """Tests for generating orders from saved quotes."""

    def test_generate_order(self, session, catalog):
        """The order mirrors the quote grouped by component."""
        quote = create_quote(session, [
            {'component_id': 'MON-01', 'quantity': 2},
            {'component_id': 'DD-01', 'quantity': 1},
            {'component_id': 'MON-01', 'quantity': 1},
        ], tax_codes=['MX'])

        order = generate_order_from_quote(session, quote.folio, 'PROV-01', fulfillment_level=80,
                                          issue_date=date(2026, 1, 10), delivery_days=5)

        assert order.number is not None and order.number > 0
        assert order.quote_folio == quote.folio
        assert order.delivery_date == date(2026, 1, 15)
        assert [(line.article_id, line.quantity) for line in order.lines] == [('MON-01', 3), ('DD-01', 1)]
        assert order.lines[0].line_total == Decimal('300.00')
        assert order.lines[0].unit_price == Decimal('100.00')

        stored = session.query(OrderModel).filter(OrderModel.number == order.number).first()
        assert stored.supplier_cve == 'PROV-01'
        assert stored.total_amount == Decimal('350.00')

    def test_reload_order(self, session, catalog):
        quote = create_quote(session, [{'component_id': 'DD-01', 'quantity': 4}])
        order = generate_order_from_quote(session, quote.folio, 'PROV-01')
        loaded = load_order(session, order.number)

        assert loaded.supplier.name == 'Proveedor Uno'
        assert loaded.delivery_date == date.today() + timedelta(days=7)
        assert loaded.lines[0].quantity == 4
        assert loaded.total == Decimal('200.00')

    def test_unknown_supplier(self, session, catalog):
        quote = create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}])
        with pytest.raises(SupplierNotFoundError):
            generate_order_from_quote(session, quote.folio, 'NOPE')
        assert session.query(OrderModel).count() == 0

    def test_unknown_quote(self, session, catalog):
        with pytest.raises(NotFoundError):
            generate_order_from_quote(session, 999, 'PROV-01')

    def test_many_orders_per_quote(self, session, catalog):
        """A quote can be split across several orders."""
        quote = create_quote(session, [{'component_id': 'DD-01', 'quantity': 1}])
        first = generate_order_from_quote(session, quote.folio, 'PROV-01', fulfillment_level=50)
        second = generate_order_from_quote(session, quote.folio, 'PROV-01', fulfillment_level=50)
        assert first.number != second.number
