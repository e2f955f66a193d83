"""Exception hierarchy for the menu checker."""


class XmlCheckError(RuntimeError):
    """Base class for failures that end a check run."""


class SourceReadError(XmlCheckError):
    """Raised when the input document cannot be opened or read."""


class XmlSyntaxError(XmlCheckError):
    """Raised when the XML parser rejects the document.

    ``offset`` is an absolute character offset into the ``Source.text``
    buffer that was parsed.
    """

    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.message = message
        self.offset = offset


class MissingRootError(XmlCheckError):
    """Raised when the document parses but lacks the expected root element."""


class ConfigError(XmlCheckError):
    """Raised when a config file is unreadable or has invalid values."""
