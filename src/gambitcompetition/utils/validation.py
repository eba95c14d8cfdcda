"""Validation utilities for competition options.

This module provides reusable validation functions with consistent error handling.
"""

# Gambit Competition
# Copyright (C) 2025  Gambit Competition developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Any, List, Optional, Sequence

from gambitcompetition.exceptions import ParameterException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable requirement that failed, if invalid
        value: Normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.value = value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"

    def raise_for(self, parameter: str) -> Any:
        """Return the normalized value, or raise ParameterException if invalid."""
        if not self.is_valid:
            raise ParameterException(self.error_message or "is invalid", parameter)
        return self.value


# ========== Integer Validation ==========


def _is_strict_int(value: Any) -> bool:
    # bool is an int subclass, but never a meaningful count
    return isinstance(value, int) and not isinstance(value, bool)


def validate_count(value: Any, minimum: int = 0) -> ValidationResult:
    """Validate that a value is an integer count at or above a minimum.

    Args:
        value: Value to validate
        minimum: Lowest accepted value

    Returns:
        ValidationResult with validation status
    """
    if not _is_strict_int(value):
        return ValidationResult(
            is_valid=False,
            error_message=f"required as an integer value, {value!r} given",
        )
    if value < minimum:
        return ValidationResult(
            is_valid=False,
            error_message=f"required >= {minimum}, {value} given",
        )
    return ValidationResult(is_valid=True, value=value)


def validate_count_list(values: Any, start_from: int) -> ValidationResult:
    """Validate a list of strictly decreasing positive integer counts.

    Used for players passing each round: every count must be an integer,
    at least 1, and lower than the previous one (starting from ``start_from``).

    Args:
        values: Sequence to validate
        start_from: Count before the first value, usually the player count

    Returns:
        ValidationResult with validation status
    """
    if not isinstance(values, (list, tuple)):
        return ValidationResult(
            is_valid=False,
            error_message="required as a list of integer values",
        )
    previous = start_from
    for count in values:
        if not _is_strict_int(count):
            return ValidationResult(
                is_valid=False,
                error_message="required as a list of integer values",
            )
        if count < 1 or count >= previous:
            return ValidationResult(
                is_valid=False,
                error_message=(
                    f"required as strictly decreasing counts below {start_from}, "
                    f"{count} given after {previous}"
                ),
            )
        previous = count
    return ValidationResult(is_valid=True, value=list(values))


# ========== Generic Validation ==========


def validate_name_list(values: Any, required: bool = False) -> ValidationResult:
    """Validate a list of non-empty names (performance types, for instance).

    Args:
        values: Sequence to validate
        required: Whether an empty list is invalid

    Returns:
        ValidationResult with validation status
    """
    if values is None:
        values = []
    if isinstance(values, str) or not isinstance(values, Sequence):
        return ValidationResult(
            is_valid=False,
            error_message="required as a list of names",
        )
    names: List[str] = []
    for name in values:
        if not isinstance(name, str) or not name.strip():
            return ValidationResult(
                is_valid=False,
                error_message=f"cannot contain empty or non-text name {name!r}",
            )
        names.append(name)
    if required and not names:
        return ValidationResult(is_valid=False, error_message="cannot be empty")
    return ValidationResult(is_valid=True, value=names)
