"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnknownPriorityError(DomainException):
    """Priority label is not one of CRITICAL, HIGH, MEDIUM, LOW"""

    pass


class UnknownSeverityError(DomainException):
    """Severity label is not a recognised recommendation severity"""

    pass


class UnknownRecordKindError(DomainException):
    """No validator or collection exists for the requested record kind"""

    pass


class StorageError(DomainException):
    """Record store failed to read or write"""

    pass


class UnknownDomainError(DomainException):
    """Domain name has no analyzer or recommendation generator"""

    pass
