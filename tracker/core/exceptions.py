#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the activity tracker.

Exception Hierarchy:
    Exception (built-in)
    └── TrackerError - Base for all tracker errors
        ├── ConfigError - Invalid or unreadable configuration
        ├── NoteParseError - A single note could not be parsed (recoverable)
        ├── NotesDirectoryError - No usable notes directory (fatal)
        └── OutputWriteError - Output document could not be written

Usage:
    from tracker.core.exceptions import NoteParseError, NotesDirectoryError

    try:
        records = parse_note_file(path)
    except NoteParseError as e:
        logger.log_note_failure(path, e)
"""


class TrackerError(Exception):
    """
    Base exception for activity tracker errors.

    Catch this to handle any tracker failure, or catch specific
    subclasses for more granular error handling.
    """

    pass


class ConfigError(TrackerError):
    """
    Exception for configuration failures.

    Raised when the configuration file cannot be read or does not
    describe a usable configuration:
    - File missing or unreadable
    - Malformed YAML/JSON
    - Unknown keys
    - Missing vault path

    Examples:
        >>> raise ConfigError("Unknown config keys: ['vaultPth']")
        >>> raise ConfigError("Config must define 'vault_path'")
    """

    pass


class NoteParseError(TrackerError):
    """
    Exception for note parsing failures.

    Raised when a single note cannot be turned into activity records:
    - File reading errors
    - Encoding issues
    - Malformed YAML frontmatter

    This error is recovered at the note level: the note is skipped and
    the batch continues.

    Examples:
        >>> raise NoteParseError("Cannot parse YAML frontmatter: invalid syntax")
        >>> raise NoteParseError("Cannot read note: permission denied")
    """

    pass


class NotesDirectoryError(TrackerError):
    """
    Exception for a missing notes directory.

    Raised when neither the configured notes directory nor any allowed
    fallback directory exists. Terminates the run.

    Examples:
        >>> raise NotesDirectoryError("Notes folder not found: ~/vault/Vibing")
    """

    pass


class OutputWriteError(TrackerError):
    """
    Exception for output document write failures.

    Examples:
        >>> raise OutputWriteError("Cannot write site/data/activity-data.json")
    """

    pass
