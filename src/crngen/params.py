"""Command-line parameter component.

Parameters are given as ``key=value``, ``--key=value`` or ``--key value``.
A bare ``key`` or ``--key`` is a switch. Names listed as switches never take
the following token as their value, so ``--directed create_ER_NM`` keeps both
as switches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Iterable, Mapping, Optional, Sequence

from crngen.errors import InvalidParameterError, MissingParameterError


def _is_option(token: str) -> bool:
    return token.startswith("--") or "=" in token


@dataclass(frozen=True)
class ParameterSet:
    values: Mapping[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_tokens(
        cls, tokens: Sequence[str], switches: Collection[str] = ()
    ) -> "ParameterSet":
        values: dict[str, Optional[str]] = {}
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1
            dashed = token.startswith("--")
            body = token[2:] if dashed else token
            if "=" in body:
                key, value = body.split("=", 1)
                values[key] = value
            elif (
                dashed
                and body not in switches
                and index < len(tokens)
                and not _is_option(tokens[index])
            ):
                values[body] = tokens[index]
                index += 1
            else:
                values[body] = None
        return cls(values)

    def have(self, name: str) -> bool:
        return name in self.values

    def missing(self, names: Iterable[str]) -> list[str]:
        return [name for name in names if name not in self.values]

    def require(self, names: Iterable[str], mode: str | None = None) -> None:
        absent = self.missing(names)
        if absent:
            raise MissingParameterError(absent, mode)

    def get_str(self, name: str) -> str:
        if name not in self.values:
            raise MissingParameterError([name])
        value = self.values[name]
        if value is None or value == "":
            raise InvalidParameterError(f"Parameter '{name}' needs a value")
        return value

    def get_int(self, name: str) -> int:
        text = self.get_str(name)
        try:
            return int(text)
        except ValueError:
            raise InvalidParameterError(
                f"Parameter '{name}' must be an integer, got '{text}'"
            ) from None

    def get_float(self, name: str) -> float:
        text = self.get_str(name)
        try:
            return float(text)
        except ValueError:
            raise InvalidParameterError(
                f"Parameter '{name}' must be a number, got '{text}'"
            ) from None

    def get_str_or(self, name: str, default: str) -> str:
        return self.get_str(name) if self.have(name) else default

    def get_int_or(self, name: str, default: Optional[int]) -> Optional[int]:
        return self.get_int(name) if self.have(name) else default
