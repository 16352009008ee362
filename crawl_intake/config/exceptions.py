"""Configuration errors."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """Raised when the service configuration is missing or invalid.

    Collects every validation problem found, plus hints for fixing them, and
    renders them as a numbered list in ``str(error)``.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            parts.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)

    @classmethod
    def from_validation_error(
        cls, exc: ValidationError, suggestions: Optional[List[str]] = None
    ) -> "ConfigurationError":
        """Translate a pydantic ValidationError into readable field errors."""
        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "<root>"
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type.endswith("_type") or error_type.endswith("_parsing"):
                errors.append(
                    f"Invalid type for '{field_path}': {error['msg']} (got {error.get('input')!r})"
                )
            elif error_type == "enum" or error_type == "literal_error":
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        return cls(
            "Configuration validation failed",
            errors=errors,
            suggestions=suggestions
            or [
                "Review config.example.yaml for the expected layout",
                "Verify field types match the expected schema",
            ],
        )
