class KeyMazeError(Exception):
    """Base exception for the keymaze project."""


class InvalidLevelData(KeyMazeError, ValueError):
    """Raised when a level matrix cannot be turned into a grid.

    Covers empty or ragged matrices, unknown tile codes and levels with more
    than one start tile.
    """


class PreconditionViolation(KeyMazeError, IndexError):
    """Raised when a grid cell is read without a prior bounds check."""


class LevelFileError(InvalidLevelData):
    """Base error for problems reading a level file."""


class LevelFileNotFoundError(LevelFileError):
    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Level file not found: {path}")


class LevelParseError(LevelFileError):
    def __init__(self, path, message: str, lineno: int | None = None, colno: int | None = None) -> None:
        self.path = path
        self.message = message
        self.lineno = lineno
        self.colno = colno
        location = f" (line {lineno}, column {colno})" if lineno is not None and colno is not None else ""
        super().__init__(f"Failed to parse level file {path}{location}: {message}")


class LevelSchemaError(LevelFileError):
    def __init__(self, path, problems: list[str]) -> None:
        self.path = path
        self.problems = list(problems)
        lines = [f"Level file {path} failed schema validation:"]
        lines.extend(f" - {p}" for p in self.problems)
        super().__init__("\n".join(lines))
