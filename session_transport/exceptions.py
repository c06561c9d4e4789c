"""
Exception hierarchy for Session Transport.

All custom exceptions inherit from SessionTransportError base class.

Errors raised by a caller-supplied request function are never wrapped in
this hierarchy; they reach the caller of ``TransportAdapter.request``
unchanged.
"""


class SessionTransportError(Exception):
    """Base exception for all Session Transport errors."""
    pass


# Configuration Errors
class ConfigurationError(SessionTransportError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


class ConfigurationLoadError(ConfigurationError):
    """Raised when loading configuration fails."""
    pass


# Transport Errors
class TransportError(SessionTransportError):
    """Base exception for transport-layer errors raised by this package."""
    pass


class TransportConfigurationError(TransportError):
    """Raised when transport options conflict or are malformed."""
    pass


class InvalidRequestError(TransportError):
    """Raised when a request description is invalid or malformed."""
    pass


class InvalidFieldValueError(InvalidRequestError):
    """Raised when a multipart field value is invalid."""
    pass


class InvalidResponseError(TransportError):
    """Raised when a request function returns something that is not a response."""
    pass
