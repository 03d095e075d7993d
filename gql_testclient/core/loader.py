"""Loading field trees from JSON files.

A field is either a string (a leaf) or an object::

    {"name": "createUser",
     "params": {"input": {"name": {"$variable": "name", "value": "Ada", "type": "String!"}}},
     "children": ["id", {"name": "profile", "children": ["bio"]}]}

A ``{"$variable": ...}`` object anywhere in ``params`` becomes a ``Variable``.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field as ModelField, field_validator

from .fields import Field, Variable

VARIABLE_KEY = "$variable"


class VariableSpec(BaseModel):
    """A variable reference inside ``params``."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str = ModelField(alias=VARIABLE_KEY, min_length=1)
    value: Any = None
    type: str | None = None

    def to_variable(self) -> Variable:
        return Variable(self.name, self.value, self.type)


class FieldSpec(BaseModel):
    """A field node as written in a tree file."""
    model_config = ConfigDict(extra="forbid")

    name: str = ModelField(min_length=1)
    params: dict[str, Any] = ModelField(default_factory=dict)
    children: list["FieldSpec | str"] = ModelField(default_factory=list)

    @field_validator("children")
    @classmethod
    def _leaf_names_not_empty(cls, children: list["FieldSpec | str"]) -> list["FieldSpec | str"]:
        for child in children:
            if isinstance(child, str) and not child:
                raise ValueError("field names must not be empty")
        return children

    def to_field(self) -> Field:
        return Field(
            self.name,
            [c.to_field() if isinstance(c, FieldSpec) else Field(c) for c in self.children],
            {key: _convert_value(value) for key, value in self.params.items()},
        )


FieldSpec.model_rebuild()


def _convert_value(value: Any) -> Any:
    if isinstance(value, dict):
        if VARIABLE_KEY in value:
            return VariableSpec.model_validate(value).to_variable()
        return {key: _convert_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_convert_value(item) for item in value]
    return value


def load_field(source: Any) -> Field:
    """Build a Field from decoded JSON (a string or a field object).

    Raises:
        pydantic.ValidationError: If the tree is malformed
    """
    if isinstance(source, str):
        source = {"name": source}
    return FieldSpec.model_validate(source).to_field()


def load_field_file(path: str | Path) -> Field:
    """Read and build a Field tree from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return load_field(json.load(f))
