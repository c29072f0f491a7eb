"""
Application exceptions for failures of external services.

Client mistakes are raised as ``ValueError`` by the services and mapped to
``HTTPException`` in the routers. The classes below cover the cases where a
dependency (LLM, rate provider, counter document) is the one failing.
"""


class PortalError(Exception):
    """Base exception carrying an HTTP status and a machine-readable code."""
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Convert to error response body."""
        return {
            "detail": self.message,
            "error": self.error_code,
        }


class LLMUnavailableError(PortalError):
    """Raised when the assistant model cannot produce an answer."""
    status_code = 503
    error_code = "llm_unavailable"

    def __init__(self, message: str = "Failed to get response from Gemini API."):
        super().__init__(message)


class ExchangeRateUnavailableError(PortalError):
    """Raised when the live exchange rate cannot be fetched."""
    status_code = 503
    error_code = "exchange_rate_unavailable"

    def __init__(self, message: str = "Ocorreu um erro ao buscar a cotação atual."):
        super().__init__(message)


class OrderNumberError(PortalError):
    """Raised when the order counter could not be advanced."""
    status_code = 503
    error_code = "order_number_unavailable"

    def __init__(self, message: str = "Falha ao obter o número do próximo pedido."):
        super().__init__(message)
