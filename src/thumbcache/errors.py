"""Error taxonomy for thumbcache.

Every failure surfaced by the coordinator is a ThumbCacheError subclass:
    - DependencyError: metadata store, object store or HTTP transport failed
    - ExternalAPIError: rendering API answered with a non-200 status
    - BadResponseError: rendering API body could not be parsed

Errors are terminal for the call. Nothing in thumbcache retries.
"""


class ThumbCacheError(Exception):
    """Base exception for thumbnail cache failures."""

    kind: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DependencyError(ThumbCacheError):
    """A backing store or the network transport failed."""

    kind = "dependency-failure"


class ExternalAPIError(ThumbCacheError):
    """The rendering API returned a non-success status."""

    kind = "external-api-failure"

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class BadResponseError(ThumbCacheError):
    """The rendering API returned an unparsable or incomplete body."""

    kind = "bad-response"

    def __init__(self, message: str, response_body: str | None = None) -> None:
        super().__init__(message)
        self.response_body = response_body
