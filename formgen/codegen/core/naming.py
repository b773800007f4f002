"""
Naming utilities for safe code generation.

Derives the type-style and value-style identifiers of a form from its
title, and sanitizes the local names (array state handles, list
components) used inside generated code.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Set

from ...errors import IdentifierError


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


# Words that cannot be used as bare identifiers in TypeScript/JSX output
TS_RESERVED_WORDS = {
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "let", "static", "yield",
    "await", "implements", "interface", "package", "private", "protected",
    "public",
}

# Names already bound inside a generated component body
COMPONENT_BINDINGS = {
    "control", "register", "formState", "handleSubmit", "onSubmit",
    "onSubmitProp", "index", "item", "name", "fields", "append", "remove",
}

_WORD_SPLIT = re.compile(r"[\W_]+")
_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, builtin_names: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_names: Set of names already bound in the generated scope
        """
        self.reserved_words = reserved_words or set()
        self.builtin_names = builtin_names or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "",
    ) -> str:
        """
        Sanitize a name for safe use in generated code.

        The same input always maps to the same output within one naming
        session; distinct inputs never share an output.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add before the counter on conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name)
        cleaned = cleaned.strip("_")

        if cleaned and cleaned[0].isdigit():
            cleaned = f"field_{cleaned}"

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        else:
            return name

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
        name = name.lower()
        name = re.sub(r"_+", "_", name)
        return name.strip("_")

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        parts = self._to_snake_case(name).split("_")
        return parts[0] + "".join(part.capitalize() for part in parts[1:])

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        parts = self._to_snake_case(name).split("_")
        return "".join(part.capitalize() for part in parts if part)

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name in self.reserved_words or name in self.builtin_names:
            name = f"{name}Field"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{suffix}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names and the cache."""
        self._used_names.clear()
        self._name_cache.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)


def create_tsx_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript/JSX output."""
    return NameSanitizer(TS_RESERVED_WORDS, COMPONENT_BINDINGS)


def type_identifier(title: str) -> str:
    """
    Derive a type-style identifier from a form title.

    Words are split on anything that is not a letter or digit, the first
    character of each word is upper-cased (the rest is kept as written) and
    leading digits are dropped: "User Registration Form" becomes
    "UserRegistrationForm". Applying it to its own output is a no-op.

    Raises:
        IdentifierError: If the title is empty or has no letters
    """
    if not title or not title.strip():
        raise IdentifierError("form title must not be empty")

    words = [word for word in _WORD_SPLIT.split(title) if word]
    identifier = "".join(word[0].upper() + word[1:] for word in words)
    identifier = identifier.lstrip("0123456789")

    if not identifier:
        raise IdentifierError(f"form title '{title}' contains no letters")
    # A first word like "1st" only exposes its letter once the digits are gone
    return identifier[0].upper() + identifier[1:]


def value_identifier(title: str) -> str:
    """Type-style identifier with its first character lower-cased."""
    identifier = type_identifier(title)
    return identifier[0].lower() + identifier[1:]


def is_js_identifier(name: str) -> bool:
    """True when a name can be used as a bare object key."""
    return bool(_JS_IDENTIFIER.match(name))


@dataclass(frozen=True)
class FormIdentifiers:
    """Every top-level name used by the generated files."""

    type_name: str
    value_name: str

    @classmethod
    def from_title(cls, title: str) -> "FormIdentifiers":
        return cls(type_identifier(title), value_identifier(title))

    @property
    def schema_name(self) -> str:
        return f"{self.value_name}Schema"

    @property
    def data_type_name(self) -> str:
        return f"{self.type_name}FormData"

    @property
    def component_name(self) -> str:
        return self.type_name

    @property
    def props_name(self) -> str:
        return f"{self.type_name}Props"
