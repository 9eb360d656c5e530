"""QuoteLine model for quote line items."""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from cotizador.database import Base, IdType


class QuoteLine(Base):
    """
    Quote Line (Detalle de Cotización).

    Stores a snapshot of the component description and price at quote time
    so later catalog changes do not alter the quote.
    """

    __tablename__ = 'quote_line'
    __table_args__ = (
        UniqueConstraint('quote_folio', 'line_number', name='uq_quote_line_number'),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    quote_folio = Column(IdType, ForeignKey('quote.folio'), nullable=False)
    line_number = Column(Integer, nullable=False)
    component_id = Column(String(40), ForeignKey('component.id'), nullable=False)
    description_snapshot = Column(String(200), nullable=False, default='')
    qty = Column(Integer, nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    line_total = Column(Numeric(14, 2), nullable=False)

    # Relationships
    quote = relationship('Quote', back_populates='lines')
    component = relationship('Component', foreign_keys=[component_id])

    def __repr__(self):
        return f"<QuoteLine(quote_folio={self.quote_folio}, line={self.line_number}, component='{self.component_id}', qty={self.qty})>"
