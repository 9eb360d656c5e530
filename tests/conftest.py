import pytest
from datetime import date
from decimal import Decimal

from cotizador import create_app
from cotizador.database import get_session
from cotizador.models import (
    Component, PcPart, Promotion, PromotionDetail, PromotionTier, Supplier
)


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing (fresh in-memory database)."""
    app = create_app('config.TestConfig')
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Create database session for testing."""
    session = get_session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(scope='function')
def supplier(session):
    """Create test supplier PROV-01."""
    supplier = Supplier(cve='PROV-01', name='Proveedor Uno', legal_name='Proveedor Uno SA de CV')
    session.add(supplier)
    session.commit()
    return supplier


@pytest.fixture(scope='function')
def catalog(session, supplier):
    """
    Seed the catalog:

    - MON-01: monitor at 100.00 with a 3x2 promotion
    - DD-01: hard disk at 50.00 without promotion
    - TV-01: video card at 200.00 with an expired 50% promotion
    - RAM-01: RAM at 40.00 with tiers 3+ = 5%, 5+ = 10%
    - PC-01: PC built from DD-01 and RAM-01
    """
    three_for_two = Promotion(name='3x2 monitores')
    three_for_two.details.append(
        PromotionDetail(position=0, is_base=True, base_type='NXM', llevent=3, paguen=2)
    )

    expired = Promotion(name='Liquidación', valid_from=date(2019, 1, 1), valid_until=date(2020, 1, 1))
    expired.details.append(
        PromotionDetail(position=0, is_base=False, accumulable_type='DESCUENTO_PLANO', flat_percent=Decimal('50'))
    )

    tiered = Promotion(name='Volumen RAM')
    tiered_detail = PromotionDetail(position=0, is_base=False, accumulable_type='DESCUENTO_POR_CANTIDAD')
    tiered_detail.tiers.append(PromotionTier(min_quantity=3, percent=Decimal('5')))
    tiered_detail.tiers.append(PromotionTier(min_quantity=5, percent=Decimal('10')))
    tiered.details.append(tiered_detail)

    session.add_all([three_for_two, expired, tiered])
    session.flush()

    monitor = Component(id='MON-01', description='Monitor 24"', brand='Acme', model='M24',
                        cost=Decimal('70'), base_price=Decimal('100'), component_type='MONITOR',
                        promotion=three_for_two)
    disk = Component(id='DD-01', description='Disco duro 1TB', brand='Acme', model='HD1',
                     cost=Decimal('30'), base_price=Decimal('50'), component_type='DISCO_DURO')
    video = Component(id='TV-01', description='Tarjeta de video', brand='Acme', model='GX',
                      cost=Decimal('150'), base_price=Decimal('200'), component_type='TARJETA_VIDEO',
                      promotion=expired)
    ram = Component(id='RAM-01', description='Memoria 16GB', brand='Acme', model='R16',
                    cost=Decimal('25'), base_price=Decimal('40'), component_type='RAM',
                    promotion=tiered)
    pc = Component(id='PC-01', description='PC Oficina', brand='Acme', model='Office',
                   component_type='PC')
    pc.parts.append(PcPart(component=disk, position=0))
    pc.parts.append(PcPart(component=ram, position=1))

    session.add_all([monitor, disk, video, ram, pc])
    session.commit()

    return {
        'three_for_two': three_for_two.id,
        'expired': expired.id,
        'tiered': tiered.id,
    }
