"""Exception types raised by the quiz core."""


class QuizError(Exception):
    """Base class for quiz application errors."""


class ContentLoadError(QuizError):
    """Question or figure catalog could not be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load content from {path}: {reason}")


class ContentUnavailableError(QuizError):
    """No question catalog is loaded, so no quiz can be started."""


class ProgressSaveError(QuizError):
    """The progress record could not be written; the stored version is unchanged."""
