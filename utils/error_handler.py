"""Custom exception classes for the application."""


class GraderError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigError(GraderError):
    """Invalid configuration value."""
    pass


class AuthenticationError(GraderError):
    """Error during the OAuth 2.0 authorization process."""
    pass


class APIError(GraderError):
    """Error interacting with the Google Sheets API."""
    def __init__(self, message: str, status_code: int | None = None, service: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.service = service

    def __str__(self) -> str:
        base = super().__str__()
        details = []
        if self.service:
            details.append(f"Service: {self.service}")
        if self.status_code:
            details.append(f"Status Code: {self.status_code}")
        if details:
            return f"{base} ({', '.join(details)})"
        return base


class GradingError(GraderError):
    """Error while computing student results."""
    pass


class RosterParseError(GradingError):
    """A roster cell could not be read as a number."""
    def __init__(self, message: str, row_number: int | None = None, column: str | None = None):
        super().__init__(message)
        self.row_number = row_number
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        if self.row_number is not None and self.column:
            return f"{base} (cell {self.column}{self.row_number})"
        if self.row_number is not None:
            return f"{base} (row {self.row_number})"
        return base


class ClassCountError(GradingError):
    """The header cell holding the total number of classes is malformed."""
    pass
