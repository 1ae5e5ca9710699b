from typing import Any, Sequence


class XmlNodeError(Exception):
    """Base class for all XmlNode errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message})"


class InvalidTypes(XmlNodeError):
    """Raised at runtime when a field is assigned an invalid type and
    config.RUNTIME_TYPE_CHECK is True."""

    def __init__(self, invalid_fields: Sequence[tuple[str, str, Any]]) -> None:
        self.invalid_fields = invalid_fields
        message = (
            "The values for following fields have incorrect types: "
            f"{', '.join(f'{name} (expected {expected}, got <{type(value).__name__}>)' for name, expected, value in invalid_fields)}"
        )
        super().__init__(message, invalid_fields)
