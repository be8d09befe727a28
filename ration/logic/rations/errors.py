class RationValidationError(ValueError):
    """A required field of a submission or query is missing or malformed (HTTP 400)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def missing(cls, field: str) -> "RationValidationError":
        return cls(f"Missing {field}")


class StoreError(RuntimeError):
    """The backing spreadsheet could not be read or written (HTTP 500)."""
