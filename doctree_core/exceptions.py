"""Exception hierarchy for DocTree Core.

All exceptions inherit from DocTreeError. None of the pipeline stages raise
them to callers: tag payload problems are recorded on the owning entity and
structural problems become diagnostics. Only input decoding and invalid
configuration surface as exceptions.
"""


class DocTreeError(Exception):
    """Base exception for all DocTree Core errors."""


class TagPayloadError(DocTreeError):
    """Raised when a tag payload is missing a required value or is malformed."""


class SourceParserError(DocTreeError):
    """Raised when a source parser cannot decode its input into raw comments."""


class ConfigurationError(DocTreeError):
    """Raised when build configuration supplied on the command line is invalid."""
