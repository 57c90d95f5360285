"""Custom exceptions for the promoter booking application."""
import enum


class ErrorKind(str, enum.Enum):
    """Stable error codes returned to API callers."""
    INVALID_HOURS = 'INVALID_HOURS'
    INVALID_PERIOD = 'INVALID_PERIOD'
    NO_SELECTION = 'NO_SELECTION'
    PERIOD_NOT_FOUND = 'PERIOD_NOT_FOUND'
    CLIENT_NOT_FOUND = 'CLIENT_NOT_FOUND'
    REGISTRATION_FAILED = 'REGISTRATION_FAILED'
    # Warning only: pricing continues with the fallback rate
    RATE_RESOLUTION_DEGRADED = 'RATE_RESOLUTION_DEGRADED'
    INVALID_PAYMENT_METHOD = 'INVALID_PAYMENT_METHOD'
    INVALID_STATUS_TRANSITION = 'INVALID_STATUS_TRANSITION'
    ORDER_NOT_FOUND = 'ORDER_NOT_FOUND'
    NOT_FOUND = 'NOT_FOUND'
    INVALID_REQUEST = 'INVALID_REQUEST'
    INTERNAL_ERROR = 'INTERNAL_ERROR'


class BookingError(Exception):
    """Base exception for all application errors."""
    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message="Ocorreu um erro interno", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['code'] = self.kind.value
        rv['status'] = 'error'
        return rv


class BusinessLogicError(BookingError):
    """Exception raised for business rule violations."""
    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)


class NotFoundError(BookingError):
    """Exception raised when a resource is not found."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message="Recurso não encontrado", payload=None):
        super().__init__(message, 404, payload)


# ---------------------------------------------------------------------------
# Selection validation
# ---------------------------------------------------------------------------

class SelectionError(BusinessLogicError):
    """A client selection failed validation; names the offending day when known."""

    def __init__(self, message, day=None, payload=None):
        self.day = day
        data = dict(payload or ())
        if day is not None:
            data['day'] = getattr(day, 'value', day)
        super().__init__(message, status_code=422, payload=data)


class InvalidHoursError(SelectionError):
    kind = ErrorKind.INVALID_HOURS

    def __init__(self, day, hours, available):
        self.hours = hours
        self.available = available
        label = getattr(day, 'label', day)
        if not available:
            message = f'{label}: promotor indisponível neste dia'
        elif hours is None:
            message = f'{label}: informe a quantidade de horas'
        else:
            message = f'{label}: quantidade de horas inválida ({hours}); máximo {available}h'
        super().__init__(message, day=day, payload={'hours': _jsonable(hours), 'available': available})


class InvalidPeriodError(SelectionError):
    kind = ErrorKind.INVALID_PERIOD

    def __init__(self, day, period_id=None, period_label=None):
        self.period_id = period_id
        label = getattr(day, 'label', day)
        if period_id is None:
            message = f'{label}: selecione um período'
        else:
            message = f'{label}: o período "{period_label or period_id}" não é válido para este dia'
        super().__init__(message, day=day, payload={'period_id': period_id})


class NoSelectionError(SelectionError):
    kind = ErrorKind.NO_SELECTION

    def __init__(self, message='Selecione ao menos um dia da semana'):
        super().__init__(message)


class PeriodNotFoundError(SelectionError):
    kind = ErrorKind.PERIOD_NOT_FOUND

    def __init__(self, period_id, day=None):
        self.period_id = period_id
        super().__init__(f'Período não encontrado: {period_id}', day=day, payload={'period_id': period_id})


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class ClientNotFoundError(NotFoundError):
    kind = ErrorKind.CLIENT_NOT_FOUND

    def __init__(self, client_id):
        self.client_id = client_id
        super().__init__('Cliente não encontrado', payload={'client_id': client_id})


class OrderNotFoundError(NotFoundError):
    kind = ErrorKind.ORDER_NOT_FOUND

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f'Pedido {order_id} não encontrado', payload={'order_id': order_id})


class InvalidPaymentMethodError(BusinessLogicError):
    kind = ErrorKind.INVALID_PAYMENT_METHOD

    def __init__(self, value):
        super().__init__(f'Forma de pagamento inválida: {value}', payload={'payment_method': _jsonable(value)})


class InvalidStatusTransitionError(BusinessLogicError):
    kind = ErrorKind.INVALID_STATUS_TRANSITION

    def __init__(self, current, target):
        current_value = getattr(current, 'value', current)
        target_value = getattr(target, 'value', target)
        if current is None:
            message = f'Status de pedido inválido: {target_value}'
        else:
            message = f'Não é possível alterar o pedido de "{current_value}" para "{target_value}"'
        super().__init__(
            message,
            status_code=409,
            payload={'current': current_value, 'target': target_value}
        )


class RegistrationFailedError(BookingError):
    """Order could not be persisted; the message is safe to show to the client."""
    kind = ErrorKind.REGISTRATION_FAILED

    def __init__(self, message='Não foi possível registrar o pedido. Tente novamente.'):
        super().__init__(message, 500)


def _jsonable(value):
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)
