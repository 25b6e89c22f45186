"""Domain errors raised by the charging core and mapped to HTTP statuses by the API layer."""


class ChargingError(Exception):
    """Base class for charging platform errors."""


class MissingFieldsError(ChargingError, ValueError):
    """Required request fields are absent or blank (400)."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidCommandError(ChargingError, ValueError):
    """Command outside the accepted set (400)."""

    def __init__(self, command: str | None) -> None:
        self.command = command
        super().__init__("Invalid command.")


class PaymentGatewayError(ChargingError):
    """Payment provider rejected the request or could not be reached (500)."""
