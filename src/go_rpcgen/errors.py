"""Errors raised by the stages of stub generation.

Stages never terminate the process; `go_rpcgen.cli.main` turns the first error into a diagnostic and an exit code.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override


@dataclass(frozen=True)
class Position:
    """A 1-based location in a source file, printed the way the Go toolchain prints it."""

    filename: str
    line: int
    column: int

    @override
    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


class GenerationError(Exception):
    """Base class of every error that aborts a generation run."""


class SourceParseError(GenerationError):
    """Raised when the source file cannot be read or is not valid Go."""

    def __init__(self, message: str, position: Position | None = None):
        self.message = message
        self.position = position
        super().__init__(f"{position}: {message}" if position else message)


class ValidationError(GenerationError):
    """Raised when the interface does not follow the conventions required for RPC stubs."""

    def __init__(self, message: str, position: Position):
        self.message = message
        self.position = position
        super().__init__(f"{position}: {message}")


class InterfaceNotFoundError(ValidationError):
    """Raised when no type with the requested name is declared in the source file."""


class NotAnInterfaceError(ValidationError):
    """Raised when the requested type is declared, but is not an interface."""


class RenderError(GenerationError):
    """Raised when the writer cannot produce the stub document."""


class OutputError(GenerationError):
    """Raised when the target file cannot be written."""


class FormatterError(GenerationError):
    """Raised when the external formatter is missing or fails on the written stubs."""
