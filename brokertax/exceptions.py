"""Custom exceptions for brokertax."""


class BrokerTaxError(Exception):
    """Base exception for statement import and tax extraction errors."""


class ParseError(BrokerTaxError):
    """Raised when a statement cannot be read as tabular text at all."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Parse error in {source}: {message}")


class FileValidationError(BrokerTaxError):
    """Raised when an uploaded file is rejected before parsing."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        super().__init__(f"{file_name}: {message}")


class SectionNotFoundError(BrokerTaxError):
    """Raised when a caller asks for a section the report does not contain."""

    def __init__(self, key: str, available: list[str]):
        self.key = key
        self.available = available
        super().__init__(
            f"Section not found: {key} (available: {', '.join(available) or 'none'})"
        )
