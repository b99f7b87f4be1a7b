"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidPurchaseError(DomainException):
    """Purchase submission is missing a name or has a non-positive amount"""

    pass


class InvalidLedgerEntryError(DomainException):
    """Ledger month key is malformed or the amount is negative"""

    pass


class CorruptRecordError(DomainException):
    """Stored purchase or ledger data failed validation at load time"""

    pass


class StorageError(DomainException):
    """A write to the backing store could not be persisted"""

    pass
