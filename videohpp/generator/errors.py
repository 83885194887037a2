"""Errors raised while reading, resolving and checking a video registry."""


class ValidationError(RuntimeError):
    """Raised when the video registry violates the registry schema.

    Every fatal condition ends up here: malformed attributes or children,
    unknown or duplicate names, naming-convention violations and unresolved
    constants. ``line`` is the offending source line, or None when the error
    concerns the document as a whole.
    """

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class DuplicateTypeError(ValidationError):
    """Raised when a type name is declared twice."""


class DuplicateDefinitionError(ValidationError):
    """Raised when an entity table already holds a definition for a name."""


class OwnershipError(ValidationError):
    """Raised when a type is claimed by an unexpected extension."""


class DependencyError(ValidationError):
    """Raised when struct dependencies cannot be satisfied in order."""
