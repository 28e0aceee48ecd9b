"""Exception hierarchy for subway line management."""


class SubwayError(Exception):
    """Base error carrying a machine-readable code."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(SubwayError):
    """Malformed request: bad endpoints, bad distance, branch or cycle."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, code="VALIDATION_ERROR")


class DuplicateError(ValidationError):
    """A unique name or color is already taken."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)
        self.code = "DUPLICATE"


class NotFoundError(SubwayError):
    """A referenced station, line, or section does not exist."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, code="NOT_FOUND")


class InvariantError(SubwayError):
    """A line's section set is not a simple path. Signals a bug or corrupt data."""

    def __init__(self, message: str = "Line topology invariant violated"):
        super().__init__(message, code="INVARIANT_VIOLATION")
