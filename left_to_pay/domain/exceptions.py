"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class StarlingAPIError(DomainException):
    """Starling API returned an error, timed out, or sent undecodable data"""

    pass


class AccountNotFoundError(DomainException):
    """No PRIMARY account is visible to the access token"""

    pass


class CurrencyMismatchError(DomainException):
    """Two amounts in different currencies were combined"""

    def __init__(self, left: str, right: str):
        super().__init__(f"Cannot combine {left} with {right}")
        self.left = left
        self.right = right


class PayReferenceMissingError(DomainException):
    """No salary reference was configured or supplied"""

    pass
