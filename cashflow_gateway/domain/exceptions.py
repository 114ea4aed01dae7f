"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidForecastRequestError(DomainException):
    """Horizon or date range is missing or out of bounds"""

    pass


class DataUnavailableError(DomainException):
    """Transaction repository failed or is unreachable"""

    pass


class DegeneratePatternError(DomainException):
    """Group cannot be scored (zero interval or zero mean amount)"""

    pass


class PayeeNotFoundError(DomainException):
    """No transactions recorded under the requested description"""

    pass
