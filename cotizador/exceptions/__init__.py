"""Custom exceptions for the quoting and ordering core."""


class CotizadorError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        rv['error'] = type(self).__name__
        return rv


class BusinessLogicError(CotizadorError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)


class NotFoundError(CotizadorError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


# Promotions

class InvalidPromotionConfiguration(BusinessLogicError):
    """Bad NxM parameters, out-of-range percentages or unknown promotion types."""
    def __init__(self, message, payload=None):
        super().__init__(message, status_code=422, payload=payload)


# Components

class InvalidComponentError(BusinessLogicError):
    """Raised when a component breaks its pricing invariants."""


class ComponentNotFoundError(NotFoundError):
    """Raised when the catalog has no component with the given id."""
    def __init__(self, component_id):
        super().__init__(f'Componente {component_id} no encontrado.', {'component_id': component_id})
        self.component_id = component_id


# Quotes

class InvalidLineError(BusinessLogicError):
    """Raised when a quote line has a non-positive quantity."""
    def __init__(self, component_id, quantity):
        message = f'Cantidad inválida para {component_id}: {quantity}. Debe ser mayor a cero.'
        super().__init__(message, payload={'component_id': component_id, 'quantity': quantity})


class EmptyQuoteError(BusinessLogicError):
    """Raised when a quote without lines is finalized."""
    def __init__(self, message='La cotización no tiene detalles.'):
        super().__init__(message)


class QuoteFinalizedError(BusinessLogicError):
    """Raised when a persisted (read-only) quote is modified."""
    def __init__(self, folio):
        super().__init__(f'La cotización {folio} ya fue guardada y no puede modificarse.', status_code=409)


class UnsupportedTaxJurisdiction(BusinessLogicError):
    """Raised for tax codes without a registered strategy."""
    def __init__(self, code):
        super().__init__(f'Impuesto no soportado: {code}', payload={'tax_code': code})
        self.code = code


# Orders

class BudgetNotLoadedError(BusinessLogicError):
    """Raised when an order is requested without a budget (presupuesto)."""
    def __init__(self, message='No hay presupuesto cargado para generar el pedido.'):
        super().__init__(message, status_code=409)


class SupplierNotFoundError(NotFoundError):
    """Raised when the supplier key is not in the supplier catalog."""
    def __init__(self, supplier_key):
        super().__init__(f'Proveedor {supplier_key} no existe.', {'supplier_key': supplier_key})
        self.supplier_key = supplier_key


class InvalidOrderError(BusinessLogicError):
    """Raised for out-of-range order parameters."""
