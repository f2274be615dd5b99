__all__ = ["TextBindError", "InvalidArgumentError", "ParseError"]


class TextBindError(Exception):
    """Base class for errors raised by textbind."""

    pass


class InvalidArgumentError(TextBindError, ValueError):
    """Raised when a required argument (shape, text, target type) is absent or unusable."""

    pass


class ParseError(TextBindError, ValueError):
    """Raised when text cannot be converted into the value space of a shape."""

    pass
