"""Error hierarchy for the Vision client.

Every failure the workflows can report derives from VisionLabError so the
CLI can print a diagnostic naming the failure kind and abort.
"""


class VisionLabError(Exception):
    """Base class for all reported failures."""

    @property
    def kind(self) -> str:
        """Failure kind shown in diagnostics."""
        return type(self).__name__


class RequestError(VisionLabError, ValueError):
    """Caller built an invalid request (missing or conflicting inputs)."""


class ServiceError(VisionLabError):
    """The annotation service reported a problem or could not be reached."""


class MalformedUriError(VisionLabError, ValueError):
    """A storage URI does not match scheme://bucket/prefix."""


class WaitTimeoutError(VisionLabError):
    """A long-running operation did not complete within the wait bound."""


class JobFailedError(VisionLabError):
    """A long-running operation finished with an error."""


class ParseError(VisionLabError):
    """A response body is not valid JSON for the expected schema."""


class NotFoundError(VisionLabError):
    """No output objects were listed under the destination prefix."""
