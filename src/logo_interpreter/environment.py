"""Variable storage for Logo programs.

Logo variables live in one flat, global namespace: MAKE inside an IF, WHILE
or REPEAT body writes the same table as MAKE at the top level, and blocks
never introduce a nested scope.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .errors import UndefinedVariableError


@dataclass
class Environment:
    """The variable table of one program run.

    Names are case-sensitive. Values are always numbers; the interpreter
    rejects boolean values before they reach the table.

    Attributes:
        variables: Variable name -> current value.
    """
    variables: dict[str, float] = field(default_factory=dict)

    def get(self, name: str) -> float:
        """Look up a variable by name.

        Args:
            name: The variable name to look up.

        Returns:
            The current value of the variable.

        Raises:
            UndefinedVariableError: If the variable has never been set.
        """
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def set(self, name: str, value: float) -> None:
        """Create the variable, or overwrite it if it already exists."""
        self.variables[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def __repr__(self) -> str:
        vars_str = ", ".join(f"{k}={v}" for k, v in self.variables.items()) if self.variables else "none"
        return f"<Environment vars=[{vars_str}]>"


# vim: set ts=4 sw=4 expandtab:
