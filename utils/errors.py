"""Failure taxonomy shared by the encoder, the model gateway, and the flows."""


class StudioError(Exception):
    """Base class for every classified failure raised by the application."""


class InvalidInputKind(StudioError):
    """The uploaded file does not declare an image media type."""


class IOFailure(StudioError):
    """The uploaded file could not be read."""


class ConfigurationError(StudioError):
    """A required setting (the API credential) is not available."""


class ServiceCallFailure(StudioError):
    """The request to the model service failed at the network or service level."""


class ResponseFormatError(StudioError):
    """The model service answered with content that does not have the expected shape."""
