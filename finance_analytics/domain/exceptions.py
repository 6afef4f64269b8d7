"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MalformedTransactionError(DomainException):
    """Transaction has an unparseable date, a non-numeric value or an unknown type"""

    def __init__(self, transaction_id: object, reason: str):
        self.transaction_id = transaction_id
        self.reason = reason
        super().__init__(f"Malformed transaction {transaction_id!r}: {reason}")


class InvalidPeriodError(DomainException):
    """Reporting period ends before it starts"""

    pass


class ColorAssignmentError(DomainException):
    """Could not issue a unique color within the retry budget"""

    pass
