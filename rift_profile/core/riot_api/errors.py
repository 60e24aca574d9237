"""Custom error classes for Riot API client.

A 429 never surfaces here: the client keeps backing off until the call
succeeds or the caller's deadline cancels it.
"""

from typing import Optional


class RiotAPIError(Exception):
    """Base exception for Riot API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        attempts: int = 0,
    ) -> None:
        """
        Initialize RiotAPIError.

        Args:
            message: Error message
            status_code: HTTP status code of the last attempt, if any
            url: Upstream URL that failed
            attempts: Number of HTTP attempts made before giving up
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.url: Optional[str] = url
        self.attempts: int = attempts
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"Riot API Error {self.status_code}: {self.message}"
        return f"Riot API Error: {self.message}"


class NotFoundError(RiotAPIError):
    """Not found error (404) - resource doesn't exist. Never retried."""

    pass


class UpstreamError(RiotAPIError):
    """Non-2xx response (other than 404/429) that survived every retry."""

    pass


class NetworkError(RiotAPIError):
    """Transport-level failure (connect, read, timeout) that survived every retry."""

    pass
