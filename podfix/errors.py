from pathlib import Path


class PodfixError(Exception):
    """Base class for errors raised while patching a project."""


class LoadError(PodfixError):
    """The project file is missing or could not be parsed."""

    def __init__(self, path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot load {self.path}: {reason}")


class SaveError(PodfixError):
    """The project file could not be written back."""

    def __init__(self, path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot save {self.path}: {reason}")


class NoMatchWarning(UserWarning):
    """No target in the project carried the requested name."""
