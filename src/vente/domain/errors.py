class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ExportError(AppError):
    pass
