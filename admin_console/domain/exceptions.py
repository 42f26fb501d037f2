"""Domain-specific exceptions — framework-independent."""


class ConsoleError(Exception):
    """Base error for the admin console core."""


class ValidationError(ConsoleError):
    """Raised when a record input breaks one or more field rules.

    Never reaches the network; ``errors`` maps wire field names to messages.
    """

    def __init__(self, entity_type: str, errors: dict[str, str]):
        self.entity_type = entity_type
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"{entity_type} input is invalid: {fields}")


class TransportError(ConsoleError):
    """Raised when a call to the remote API fails."""


class RequestBuildError(TransportError):
    """Raised when a request could not be constructed."""


class ConnectionFailedError(TransportError):
    """Raised when a request was sent but no response was received."""


class ResponseFormatError(TransportError):
    """Raised when the server answered but the body is not a usable envelope."""


class ServerStatusError(TransportError):
    """Raised when the server answered with an error status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class NotFoundError(ServerStatusError):
    """Raised when the server reports that a record does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(404, message or f"{entity_type} with id '{entity_id}' not found")


class InvalidTransitionError(ConsoleError):
    """Raised when an orchestrator action is not allowed in its current state."""

    def __init__(self, current: str, action: str):
        self.current = current
        self.action = action
        super().__init__(f"Cannot {action} while {current}")
