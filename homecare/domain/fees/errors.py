"""Fee domain errors"""


class InvalidInputError(ValueError):
    """Raised when a fee or co-payment input is outside the tariff's defined range"""
