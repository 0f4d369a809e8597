"""Error types raised by the link registry."""


class LinkError(ValueError):
    """Base class for registry errors that map to a client-facing message."""


class InvalidURLError(LinkError):
    """The long URL is not a well-formed absolute http(s) URL."""


class InvalidShortCodeError(LinkError):
    """A caller-supplied short code is malformed, reserved or not allowed."""


class CodeConflictError(LinkError):
    """The requested custom short code is already in use."""


class ExhaustedKeyspaceError(LinkError):
    """No unused short code was found within the configured number of draws."""
