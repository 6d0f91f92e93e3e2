"""Exceptions raised while turning a GraphQL schema into generated code.

Every failure is terminal for the current run; callers catch
GenerationError to report it once.
"""


class GenerationError(Exception):
    """Base class for all gql-netgen errors."""


class AcquisitionError(GenerationError):
    """The schema could not be read from disk or fetched from the endpoint."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Could not load schema from {source}: {message}")


class ParseError(GenerationError):
    """The SDL text is not syntactically valid GraphQL."""


class FormatError(GenerationError):
    """The introspection payload does not have the expected response shape."""


class ConfigurationError(GenerationError):
    """A command-line option holds an unusable value."""
