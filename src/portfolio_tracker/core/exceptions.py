"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


# Price lookup failures. Providers translate every upstream problem into one of
# these; callers never see transport-level status codes.


class PriceError(AppError):
    """Base class for price lookup failures."""

    status_code = 502

    def __init__(self, message: str, code: str = "PRICE_ERROR"):
        super().__init__(message, code=code)


class InvalidTickerError(PriceError):
    """Raised when the upstream service does not know the ticker."""

    status_code = 404

    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f"Invalid ticker symbol: {ticker}", code="INVALID_TICKER")


class RateLimitedError(PriceError):
    """Raised when the upstream service rejects a request for rate limiting."""

    status_code = 429

    def __init__(self, message: str = "API rate limit reached. Please try again later."):
        super().__init__(message, code="RATE_LIMITED")


class UpstreamUnavailableError(PriceError):
    """Raised on network failures, timeouts, bad configuration or malformed responses."""

    status_code = 503

    def __init__(self, message: str):
        super().__init__(message, code="UPSTREAM_UNAVAILABLE")


class PriceNotFoundError(PriceError):
    """Raised when no close price exists within the searched date range."""

    status_code = 404

    def __init__(self, ticker: str, start: str, end: str):
        self.ticker = ticker
        super().__init__(
            f"No price data available for {ticker} between {start} and {end}",
            code="PRICE_NOT_FOUND",
        )
