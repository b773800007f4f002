"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the filters the TypeScript/JSX templates rely on.

Variables are written as ``[[ name ]]`` because JSX expressions use
``{...}`` everywhere; statements keep the usual ``{% ... %}`` syntax.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from .naming import is_js_identifier


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None, indent_unit: str = "  "):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            indent_unit: Text inserted per nesting level by the ``nest`` filter
        """
        self.template_dir = template_dir
        self.indent_unit = indent_unit
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            variable_start_string="[[",
            variable_end_string="]]",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

        self._env.filters["nest"] = self.nest
        self._env.filters["js_string"] = js_string
        self._env.filters["jsx_attr"] = jsx_attr
        self._env.filters["jsx_text"] = jsx_text
        self._env.filters["ts_key"] = ts_key
        self._env.filters["ts_literal"] = ts_literal
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    # Template filters for code generation

    def nest(self, value: str, levels: int = 1) -> str:
        """Indent every non-blank line of a block by ``levels`` nesting levels."""
        indent = self.indent_unit * levels
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def js_string(value: Any) -> str:
    """Double-quoted JavaScript string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def jsx_attr(value: Any) -> str:
    """JSX attribute value: a plain string when possible, else an expression."""
    text = str(value)
    if '"' in text or "\n" in text:
        return "{" + js_string(text) + "}"
    return f'"{text}"'


def jsx_text(value: Any) -> str:
    """JSX child text, wrapped in an expression when it contains markup characters."""
    text = str(value)
    if any(char in text for char in "{}<>"):
        return "{" + js_string(text) + "}"
    return text


def ts_key(name: str) -> str:
    """Object key: bare when it is an identifier, quoted otherwise."""
    if is_js_identifier(name):
        return name
    return js_string(name)


def ts_literal(value: Any) -> str:
    """Render a default value as a TypeScript literal."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return js_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(ts_literal(item) for item in value) + "]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        body = ", ".join(f"{ts_key(key)}: {ts_literal(item)}" for key, item in value.items())
        return "{ " + body + " }"
    raise TemplateError(f"Cannot render {type(value).__name__} as a TypeScript literal")


def create_template_engine(
    template_dir: Optional[Path] = None, indent_unit: str = "  "
) -> TemplateEngine:
    """Create a template engine, file-backed when a directory is given."""
    return TemplateEngine(template_dir, indent_unit)
