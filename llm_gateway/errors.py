from __future__ import annotations  # Gateway error taxonomy


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class ConfigurationError(LlmGatewayError):  # No usable provider credential configured
    pass


class UnknownProviderError(LlmGatewayError):  # Resolved provider has no wire adapter
    pass


class UpstreamError(LlmGatewayError):
    """Non-success answer from a provider, with its status and body kept verbatim."""

    def __init__(self, label: str, status_code: int, body: str) -> None:
        self.label = label
        self.status_code = status_code
        self.body = body
        super().__init__(f"{label} API error: {status_code} - {body}")


__all__ = ["ConfigurationError", "LlmGatewayError", "UnknownProviderError", "UpstreamError"]
