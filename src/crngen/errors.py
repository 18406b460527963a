"""Error hierarchy for crngen."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional


class CrnGenError(Exception):
    """Base exception for crngen failures."""

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.user_message = message if user_message is None else user_message
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class MissingParameterError(CrnGenError):
    """A required command-line parameter was not given."""

    def __init__(self, names: tuple[str, ...] | list[str], mode: str | None = None) -> None:
        self.names = tuple(names)
        quoted = ", ".join(f"'{name}'" for name in self.names)
        noun = "parameter" if len(self.names) == 1 else "parameters"
        message = f"You need to give {noun} {quoted}! Could not proceed!"
        super().__init__(message, context={"mode": mode} if mode else None)


class InvalidParameterError(CrnGenError):
    """A parameter value could not be parsed or is out of range."""


class FileIOError(CrnGenError):
    """Reading or writing a network file failed."""

    def __init__(self, message: str, path: str | Path, **kwargs: Any) -> None:
        self.path = Path(path)
        super().__init__(f"{message} ({self.path})", **kwargs)


class JrnfFormatError(FileIOError):
    """A jrnf file does not follow the expected layout."""

    def __init__(self, message: str, path: str | Path, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} at line {line}"
        super().__init__(message, path)


class InfeasibleParametersError(CrnGenError):
    """A generator cannot produce the requested edges under its flags."""


@dataclass(frozen=True)
class CouplingShortfall:
    """Fewer coupling pairs than requested could be formed."""

    requested: int
    achieved: int

    def __str__(self) -> str:
        return (
            f"Only {self.achieved} of {self.requested} requested edge pairs "
            "could be coupled"
        )


__all__ = [
    "CrnGenError",
    "MissingParameterError",
    "InvalidParameterError",
    "FileIOError",
    "JrnfFormatError",
    "InfeasibleParametersError",
    "CouplingShortfall",
]
