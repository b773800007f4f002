"""
react-hook-form field paths.

A FieldPath is the name under which a field is registered. Inside an array
item it contains the ``${index}`` placeholder and is rendered as a template
literal instead of a plain string.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from ..core.templates import js_string, jsx_attr

_PLACEHOLDER = re.compile(r"^\$\{(\w+)\}$")


@dataclass(frozen=True)
class FieldPath:
    """Dotted registration path; parts may be ``${expr}`` placeholders."""

    parts: Tuple[str, ...] = ()

    @classmethod
    def from_expression(cls, expression: str) -> "FieldPath":
        """Path rooted at a runtime value, e.g. the ``name`` prop of a list component."""
        return cls(("${" + expression + "}",))

    def child(self, name: str) -> "FieldPath":
        return FieldPath(self.parts + (name,))

    def item(self, index_var: str = "index") -> "FieldPath":
        return FieldPath(self.parts + ("${" + index_var + "}",))

    @property
    def dynamic(self) -> bool:
        return any("${" in part for part in self.parts)

    @property
    def text(self) -> str:
        return ".".join(self.parts)

    @property
    def static_names(self) -> Tuple[str, ...]:
        """The configured field names along the path, placeholders removed."""
        return tuple(part for part in self.parts if "${" not in part)

    def js(self) -> str:
        """JavaScript expression evaluating to the path."""
        if len(self.parts) == 1:
            match = _PLACEHOLDER.match(self.parts[0])
            if match:
                return match.group(1)
        if self.dynamic:
            return f"`{self.text}`"
        return js_string(self.text)

    def jsx(self) -> str:
        """Path as a JSX attribute value."""
        if self.dynamic:
            return "{" + self.js() + "}"
        return jsx_attr(self.text)
