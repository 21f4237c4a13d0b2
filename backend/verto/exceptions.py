"""Exception hierarchy for the Verto service."""


class VertoError(Exception):
    """Base exception for all application exceptions."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class MarketDataError(VertoError):
    """Raised when market data cannot be fetched or decoded."""


class InvalidSettingError(VertoError):
    """Raised when a setting key or value is not accepted."""

    def __init__(self, key: str, message: str = "is not a valid setting"):
        self.key = key
        super().__init__(f"Setting '{key}' {message}")


class PositionNotFoundError(VertoError):
    """Raised when a portfolio position does not exist."""

    def __init__(self, position_id: int):
        self.position_id = position_id
        super().__init__(f"Portfolio position {position_id} not found")
