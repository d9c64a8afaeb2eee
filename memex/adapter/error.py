"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class UpstreamUnavailable(ProviderError):
    """Raised when an external service cannot be reached or fails."""

    def __init__(self, service: str, reason: str):
        self.service = service
        super().__init__(f"{service} unavailable: {reason}")
