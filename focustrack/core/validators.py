#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for all Focus Track operations.

Provides type-safe conversion used by the entry codec, the configuration
loader and the CLI.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, List, Optional

from .exceptions import ValidationError


class DataValidator:
    """Centralized data validation for tracker operations."""

    @staticmethod
    def normalize_date(date_value: Any) -> Optional[date]:
        """
        Normalize various date inputs to date object.

        Args:
            date_value: ISO date string, date object, or datetime

        Returns:
            Normalized date object or None for empty input

        Raises:
            ValidationError: If a string is not a valid ISO date
        """
        # datetime is a date subclass; check it first
        if isinstance(date_value, datetime):
            return date_value.date()
        elif isinstance(date_value, date):
            return date_value
        elif isinstance(date_value, str):
            text = date_value.strip()
            if not text:
                return None
            try:
                return date.fromisoformat(text[:10])
            except ValueError as e:
                raise ValidationError(
                    f"Invalid date format: expected YYYY-MM-DD, got '{date_value}'"
                ) from e
        elif date_value is None:
            return None
        raise ValidationError(f"Cannot convert {type(date_value).__name__} to date")

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert various inputs to boolean.

        Raises:
            ValidationError: If conversion fails
        """
        if isinstance(value, bool):
            return value
        elif isinstance(value, (int, float)):
            if value == 0:
                return False
            elif value == 1:
                return True
            else:
                raise ValidationError(f"Cannot convert numeric '{value}' to boolean")
        elif isinstance(value, str):
            if value.lower() in ("true", "1", "yes", "on"):
                return True
            elif value.lower() in ("false", "0", "no", "off"):
                return False
            else:
                raise ValidationError(f"Cannot convert '{value}' to boolean")
        elif value is not None:
            return bool(value)
        return None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer strictly.

        Booleans and non-integral floats are rejected.

        Raises:
            ValidationError: If value is not an integer
        """
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValidationError(f"Expected an integer, got boolean '{value}'")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as e:
                raise ValidationError(f"Expected an integer, got '{value}'") from e
        raise ValidationError(f"Expected an integer, got {type(value).__name__} '{value}'")

    @staticmethod
    def coerce_number(value: Any) -> Optional[float]:
        """
        Coerce a loosely-typed value to a finite number.

        Mirrors how legacy logs were written: numbers pass through and
        numeric-looking strings are converted. Anything else is None.

        Examples:
            >>> DataValidator.coerce_number("3")
            3.0
            >>> DataValidator.coerce_number("done") is None
            True
            >>> DataValidator.coerce_number(10 ** 400) is None
            True
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                return None
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                number = float(text)
            except ValueError:
                return None
        else:
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return number

    @staticmethod
    def normalize_string_list(value: Any, field_name: str = "value") -> List[str]:
        """
        Normalize a scalar or sequence option into a list of strings.

        Raises:
            ValidationError: If the value is a mapping or other structure
        """
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value else []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None]
        raise ValidationError(
            f"{field_name} must be a string or a list of strings, got {type(value).__name__}"
        )
