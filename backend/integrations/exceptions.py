"""
Errors raised by the marketplace API client.
"""


class IntegrationError(Exception):
    """Base exception for API client errors."""

    code = "integration_error"
    retryable = False


class NetworkFailure(IntegrationError):
    """The API could not be reached, timed out or answered with a 5xx."""

    code = "network_failure"
    retryable = True

    def __init__(self, method, url, reason, status_code=None):
        self.method = method
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{method} {url} failed: {reason}")


class ApiError(IntegrationError):
    """The API rejected the request (4xx). Repeating it will not help."""

    code = "api_error"

    def __init__(self, status_code, payload=None, message=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        if message is None:
            detail = None
            if isinstance(self.payload, dict):
                detail = self.payload.get("error") or self.payload.get("detail")
            message = f"API returned {status_code}" + (f": {detail}" if detail else "")
        super().__init__(message)

    @property
    def error_code(self):
        if isinstance(self.payload, dict):
            return self.payload.get("code")
        return None


class DecodeError(IntegrationError):
    """A response payload is missing a required field or has the wrong shape."""

    code = "decode_error"

    def __init__(self, field, payload=None, message=None):
        self.field = field
        self.payload = payload
        if message is None:
            message = f"Missing or invalid field '{field}' in API payload"
        super().__init__(message)
