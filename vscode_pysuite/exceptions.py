class PySuiteError(Exception):
    """Base error for the vscode_pysuite generator."""


class ConfigError(PySuiteError):
    """Raised when a configuration file cannot be loaded or is invalid."""


class RootResolutionError(PySuiteError):
    """Raised when no root path was given and the working directory is unavailable."""


class ArtifactWriteError(PySuiteError):
    """Raised when a generated file cannot be written."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path
