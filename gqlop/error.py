__all__ = ["ClientAware", "RequestError", "InvariantViolation"]


class ClientAware:
    """Errors which know whether their message can be shown to a client"""

    def is_client_safe(self) -> bool:
        return False


class RequestError(ClientAware, Exception):
    """Client-caused error: malformed or unsupported request"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def is_client_safe(self) -> bool:
        return True


class InvariantViolation(Exception):
    """Server misconfiguration, never reported as a normal result"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
