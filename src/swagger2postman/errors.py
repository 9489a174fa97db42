"""Exceptions raised by the conversion pipeline."""


class ConversionError(Exception):
    """Base class for every fatal conversion failure."""


class DocumentValidationError(ConversionError):
    """The source document could not be loaded, resolved or validated."""


class SchemaRecursionError(ConversionError):
    """A schema fragment nests into itself while rendering an example body."""
