"""Query builder for GraphQL operations.

Serializes a ``Field`` tree into GraphQL document text, collecting every
``Variable`` referenced by an argument along the way.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from .fields import Field, Variable
from .scalars import ScalarRegistry, default_registry

logger = logging.getLogger(__name__)

# Keys that behave like list indexes: 0, 1, "2", "-3" (not "01" or "-0")
_NUMERIC_KEY = re.compile(r"0|-?[1-9][0-9]*")


class VariableConflictError(ValueError):
    """Raised when one operation binds a variable name to two different values."""

    def __init__(self, name: str, first: Variable, second: Variable):
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Variable ${name} is bound to conflicting values: "
            f"{first.value!r} ({first.type_name}) and {second.value!r} ({second.type_name})"
        )


def is_numeric_key(key: Any) -> bool:
    """Check if a mapping key is an integer or an integer-like string."""
    if isinstance(key, int):
        return True
    return isinstance(key, str) and _NUMERIC_KEY.fullmatch(key) is not None


def has_string_keys(value: Mapping) -> bool:
    """Check if a mapping has at least one non-numeric key (object semantics)."""
    return any(not is_numeric_key(key) for key in value.keys())


@dataclass
class RenderedField:
    """Document text for one field plus the variables it references, in order."""
    text: str
    variables: dict[str, Variable] = field(default_factory=dict)


class QueryBuilder:
    """Builds GraphQL query and mutation payloads from field trees.

    The builder holds no per-request state: every ``render`` call starts a
    fresh variable registry, so one builder can be shared across requests.
    """

    def __init__(self, scalars: ScalarRegistry | None = None):
        self.scalars = scalars or default_registry

    def render(self, root: Field) -> RenderedField:
        """Render a field (with its arguments and children) to document text.

        Args:
            root: The field to render, usually an operation root

        Returns:
            The text and the variables encountered, in depth-first order
        """
        variables: dict[str, Variable] = {}
        text = self._field_string(root, variables)
        return RenderedField(text, variables)

    def build_query(self, query: Field) -> dict[str, Any]:
        """Build the transport payload for a query.

        Queries never declare variables; their ``variables`` field is None.
        """
        rendered = self.render(query)
        if rendered.variables:
            logger.warning(
                "Query %s references variables %s that queries do not declare",
                query.name,
                ", ".join(f"${name}" for name in rendered.variables),
            )
        document = f"query {{ {rendered.text} }}"
        logger.debug("Built query document: %s", document)
        return {"query": document, "variables": None}

    def build_mutation(self, query: Field) -> dict[str, Any]:
        """Build the transport payload for a mutation.

        Returns:
            ``{"query": ..., "variables": {name: value}}`` with variables in
            first-encountered order
        """
        rendered = self.render(query)
        header = self.build_header(rendered.variables)
        document = f"mutation {header} {{ {rendered.text} }}"
        logger.debug("Built mutation document: %s", document)
        return {
            "query": document,
            "variables": self.variable_content(rendered.variables),
        }

    def build_header(self, variables: Mapping[str, Variable]) -> str:
        """Build the variable declaration part: ($id: ID!, $input)"""
        if not variables:
            return ""
        return "(" + ", ".join(v.declaration for v in variables.values()) + ")"

    def variable_content(self, variables: Mapping[str, Variable]) -> dict[str, Any]:
        """Map each registered variable name to its serialized value."""
        return {name: self.scalars.serialize(v.value) for name, v in variables.items()}

    def _field_string(self, node: Field, variables: dict[str, Variable]) -> str:
        params = ""
        if node.params:
            body = self._param_string(node.params, variables)
            if body:
                params = f"({body})"

        selection = ""
        if node.children:
            selection = "{"
            for child in node.children:
                selection += self._field_string(child, variables) + "\n"
            selection += "}"

        return f"{node.name}{params} {selection}"

    def _param_string(self, params: Mapping | list | tuple, variables: dict[str, Variable]) -> str:
        items = params.items() if isinstance(params, Mapping) else enumerate(params)
        result = ""
        for key, value in items:
            if isinstance(key, str) and not is_numeric_key(key):
                result += f"{key} : "
            result += self._value_string(value, variables)
        return result

    def _value_string(self, value: Any, variables: dict[str, Variable]) -> str:
        if isinstance(value, Variable):
            self._register(value, variables)
            return f"${value.name} "

        if not isinstance(value, (Mapping, list, tuple)):
            value = self.scalars.serialize(value)

        if isinstance(value, Mapping):
            body = self._param_string(value, variables)
            if has_string_keys(value):
                return f"{{ {body} }} "
            return f"[ {body} ] "
        if isinstance(value, (list, tuple)):
            return f"[ {self._param_string(value, variables)} ] "

        return f"{json.dumps(value)} "

    @staticmethod
    def _register(variable: Variable, variables: dict[str, Variable]):
        existing = variables.get(variable.name)
        if existing is None:
            variables[variable.name] = variable
            return
        if existing is variable:
            return
        if existing.value != variable.value or existing.type_name != variable.type_name:
            raise VariableConflictError(variable.name, existing, variable)
