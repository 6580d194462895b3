"""Project-native typed exceptions for orchestration-service API failures."""

from __future__ import annotations


class UpdateApiError(Exception):
    """Base exception for update-job API failures.

    Attributes:
        operation_name: Operation whose dispatch failed.
    """

    def __init__(self, message: str, operation_name: str | None = None):
        super().__init__(message)
        self.operation_name = operation_name


class ApiApplicationError(UpdateApiError, RuntimeError):
    """Non-retryable failure reported by the service with status `>= 400`.

    Attributes:
        status_code: HTTP status returned by the service.
        body: Raw response body, verbatim.
    """

    def __init__(self, body: str, status_code: int, operation_name: str | None = None):
        super().__init__(body, operation_name=operation_name)
        self.status_code = status_code
        self.body = body


class ApiTransientError(UpdateApiError, ConnectionError):
    """Connection or TLS failure that outlived the retry budget.

    Attributes:
        cause: Last transport exception observed.
        attempts: Number of attempts made before giving up.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException,
        attempts: int,
        operation_name: str | None = None,
    ):
        super().__init__(message, operation_name=operation_name)
        self.cause = cause
        self.attempts = attempts
