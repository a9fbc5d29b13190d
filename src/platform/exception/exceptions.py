class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    kind: str = 'error'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    kind = 'domain_error'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidStateError(DomainError):
    """A status precondition does not hold (ticket not available, escrow not holding, ...)"""

    kind = 'invalid_state'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    kind = 'forbidden'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    kind = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class TransactionFailureError(CustomBaseError):
    """Unexpected failure inside an atomic unit (provider rejection, storage error)"""

    kind = 'transaction_failure'

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
