"""
Errors Module
=============

Exceptions raised while handling dictionary files on disk. None of them is
allowed to escape a scan or a promotion run: callers log them per file and
move on to the next one.
"""


class DictionaryPackError(Exception):
    """Base class for all dictionary pack errors."""


class MalformedEscape(DictionaryPackError, ValueError):
    """An escaped file name holds a '%' not followed by six hex digits."""

    def __init__(self, name: str, position: int):
        self.name = name
        self.position = position
        super().__init__(f"Malformed escape at position {position} in '{name}'")


class MalformedStagingName(DictionaryPackError):
    """A staging file name lacks the separator or splits into the wrong number of parts."""

    def __init__(self, file_name: str, missing_separator: bool = False):
        self.file_name = file_name
        self.missing_separator = missing_separator
        if missing_separator:
            message = f"Staging file {file_name} does not have the separator substring"
        else:
            message = f"Malformed staging file {file_name}"
        super().__init__(message)


class UnreadableContainer(DictionaryPackError):
    """The dictionary container header could not be read."""


class UnsupportedFormat(UnreadableContainer):
    """The header is not a known container format."""


class IOFailure(UnreadableContainer):
    """Reading the header failed at the file system level."""


class DirectoryCreateFailure(DictionaryPackError):
    """A directory could not be created."""


class RenameFailure(DictionaryPackError):
    """Moving a staged file into the cache failed."""
