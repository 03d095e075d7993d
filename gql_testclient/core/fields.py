"""Field tree for GraphQL operations.

A selection is an ordered tree of ``Field`` nodes. Any node may carry
arguments; the node passed to ``query``/``mutate`` is the operation root.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Variable:
    """A named placeholder whose value travels in the ``variables`` payload.

    ``type_name`` is only used for the declaration header of a mutation,
    e.g. ``Variable("id", "abc", "ID!")`` declares ``$id: ID!``.
    """
    name: str
    value: Any = None
    type_name: str | None = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Variable name must not be empty")

    @property
    def declaration(self) -> str:
        """Header declaration, e.g. ``$id: ID!``."""
        if self.type_name:
            return f"${self.name}: {self.type_name}"
        return f"${self.name}"


@dataclass
class Field:
    """A named selection with optional sub-selections and arguments."""
    name: str
    children: list["Field | str"] = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Field name must not be empty")
        # Bare strings are shorthand for leaf fields
        self.children = [
            child if isinstance(child, Field) else Field(child)
            for child in self.children
        ]

    @classmethod
    def of(cls, name: str, *children: "Field | str", **params: Any) -> "Field":
        """Shorthand: ``Field.of("user", "id", "name", id=5)``."""
        return cls(name, list(children), dict(params))

    @property
    def is_leaf(self) -> bool:
        return not self.children


# Operation roots are plain fields that usually carry params
Query = Field
