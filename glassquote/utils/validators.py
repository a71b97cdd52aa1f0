"""Input validation utilities.

This module provides validation for the user input the app accepts:
- Decimal numbers typed in text inputs (dimensions, markup, prices)
- The glass type form
- The login form

Form validators return ValidationResult objects for consistent error handling.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        errors: List of error messages (empty if valid)
        warnings: List of warning messages (non-fatal issues)

    Example:
        >>> result = ValidationResult(is_valid=True)
        >>> if result.is_valid:
        ...     submit()
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.is_valid

    def add_error(self, error: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    @property
    def first_error(self) -> Optional[str]:
        return self.errors[0] if self.errors else None


def parse_decimal(text) -> Optional[float]:
    """Parse user-typed text as a finite decimal number.

    Accepts a comma as decimal separator ("1,5") and surrounding
    whitespace. NaN and infinities are not numbers here.

    Returns:
        The parsed float, or None when the text is not a number

    Example:
        >>> parse_decimal("2,50")
        2.5
        >>> parse_decimal("abc") is None
        True
    """
    if text is None:
        return None
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        cleaned = str(text).strip().replace(',', '.')
        if not cleaned:
            return None
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


class GlassTypeValidator:
    """Validates the glass type create/update form."""

    MAX_NAME_LENGTH = 100

    @classmethod
    def validate(cls, name: str, price_text) -> ValidationResult:
        """Check required name and a non-negative price.

        Args:
            name: Glass type name
            price_text: Price per m² as typed

        Returns:
            ValidationResult with is_valid flag and any errors
        """
        result = ValidationResult(is_valid=True)

        if not name or not name.strip():
            result.add_error("El nombre es obligatorio")
        elif len(name.strip()) > cls.MAX_NAME_LENGTH:
            result.add_error(f"El nombre no puede superar {cls.MAX_NAME_LENGTH} caracteres")

        price = parse_decimal(price_text)
        if price is None:
            result.add_error("El precio por m² debe ser un número")
        elif price < 0:
            result.add_error("El precio por m² no puede ser negativo")

        return result


class LoginValidator:
    """Validates the login form."""

    @classmethod
    def validate(cls, username: str, password: str) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        if not username or not username.strip():
            result.add_error("Ingresá el usuario")
        if not password:
            result.add_error("Ingresá la contraseña")
        return result
