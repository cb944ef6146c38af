class GatewayError(Exception):
    """Base class for errors raised by the upload gateway."""


class ConfigurationError(GatewayError):
    """Required configuration is absent or empty."""


class MalformedFieldError(GatewayError):
    """A multipart field lacks its filename or content type."""


class UploadError(GatewayError):
    """The object store rejected or failed a put-object request."""
