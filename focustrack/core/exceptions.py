#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Focus Track project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    └── FocusTrackError - Base for all project errors
        ├── ConfigurationError - Malformed tracker options
        ├── ValidationError - Data validation failures
        ├── DocumentNotFoundError - Referenced note does not exist
        ├── DocumentReadError - Note exists but cannot be read
        ├── HeaderParseError - Frontmatter cannot be parsed
        ├── StoreWriteError - Frontmatter field could not be written
        └── MutationError - Log mutation request is invalid

Usage:
    from focustrack.core.exceptions import ConfigurationError, MutationError

    try:
        tracker.update_entry(path, date, rating=3)
    except MutationError as e:
        logger.log_warning(f"Mutation rejected: {e}")
"""


class FocusTrackError(Exception):
    """
    Base exception for Focus Track errors.

    Catch this to handle any project error, or catch specific
    subclasses for more granular error handling.
    """

    pass


class ConfigurationError(FocusTrackError):
    """
    Exception for malformed tracker configuration.

    Raised when the options text of a tracker cannot be turned into a
    configuration:
    - YAML/JSON syntax errors
    - Top-level value is not a mapping
    - Option has the wrong type (e.g. non-integer day counts)
    - Unparseable focal date

    Callers fall back to an all-defaults configuration.

    Examples:
        >>> raise ConfigurationError("daysInPast must be an integer, got 'ten'")
        >>> raise ConfigurationError("Options must be a mapping, got list")
    """

    pass


class ValidationError(FocusTrackError):
    """
    Exception for data validation failures.

    Examples:
        >>> raise ValidationError("Invalid date format: expected YYYY-MM-DD")
    """

    pass


class DocumentNotFoundError(FocusTrackError):
    """
    Exception for notes missing from the vault.

    Raised when a path handed to the store does not resolve to an existing
    markdown document, either because it never existed or because it was
    removed between a read and a write.

    Attributes:
        path: Vault-relative path that could not be found

    Examples:
        >>> raise DocumentNotFoundError("projects/alpha.md")
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No document found for path: {path}")


class DocumentReadError(FocusTrackError):
    """
    Exception for notes that exist but cannot be read as UTF-8 text.

    Raised for undecodable bytes and file system errors (permissions,
    I/O). Read paths treat such a note as having no frontmatter.

    Attributes:
        path: Vault-relative path of the note
        reason: Underlying error message
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class HeaderParseError(FocusTrackError):
    """
    Exception for unparseable YAML frontmatter.

    Only raised internally by the store; the public read path converts it
    to an empty header.

    Examples:
        >>> raise HeaderParseError("Cannot parse YAML frontmatter: invalid syntax")
    """

    pass


class StoreWriteError(FocusTrackError):
    """
    Exception for failed frontmatter writes.

    Raised when writing a structured field back into a note fails:
    - Existing frontmatter is not a mapping
    - File system errors (permissions, disk space)

    Examples:
        >>> raise StoreWriteError("Cannot write focus-logs: frontmatter is a list")
    """

    pass


class MutationError(FocusTrackError):
    """
    Exception for invalid log mutation requests.

    Raised when a create/update/clear request lacks the attributes it
    needs (note path or date) or carries an unusable value.

    Examples:
        >>> raise MutationError("Mutation request is missing a date")
    """

    pass
