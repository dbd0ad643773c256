"""Exceptions raised while decoding or building a maze."""


class MazeParseError(Exception):
    """Exception raised when maze data cannot be decoded."""

    pass


class IncompleteDataError(MazeParseError):
    """Raised when there are fewer bytes than the declared dimensions need."""

    def __init__(self, actual: int, required: int):
        self.actual = actual
        self.required = required
        super().__init__(
            f"Maze data is incomplete! Got {actual} bytes, need at least {required}"
        )


class NoExitError(MazeParseError):
    """Raised when a decoded maze has no exit cell."""

    def __init__(self, message: str = "Maze doesn't have an exit!"):
        super().__init__(message)


class MazeValidationError(Exception):
    """Exception raised when maze dimensions or start position are invalid."""

    pass
