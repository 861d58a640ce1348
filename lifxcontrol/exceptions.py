"""
lifxcontrol library exceptions.

This module defines all custom exceptions used throughout the library.
Transport failures (TimeoutError, OSError) are not wrapped; they reach the
caller exactly as the socket layer raised them.
"""


class LifxError(Exception):
    """Base exception for LIFX protocol errors"""
    pass


class MalformedInputError(LifxError):
    """Raised when a received message is too short for the field being decoded"""
    pass


class InvalidColourValueError(LifxError, ValueError):
    """Raised when a hue, percentage, wire word or RGB channel is out of range"""
    pass


class UnknownColourNameError(LifxError, KeyError):
    """Raised when a colour name is not in the named colour table"""

    def __str__(self) -> str:
        # KeyError quotes its argument, which reads badly for a message
        return str(self.args[0]) if self.args else ""


class LifxConfigurationError(LifxError):
    """Raised when configuration is invalid"""
    pass
