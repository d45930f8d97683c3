"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for emitting Python source.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)
from jinja2 import TemplateError as JinjaTemplateError

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            # Generated Python source, never markup
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters["py_string"] = self._py_string_filter
        self._env.filters["py_tuple"] = self._py_tuple_filter
        self._env.filters["docstring"] = self._docstring_filter
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
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    # Template filters for code generation

    @staticmethod
    def _py_string_filter(value: Any) -> str:
        """Render a value as a double-quoted Python string literal (or None)."""
        if value is None:
            return "None"
        return json.dumps(str(value), ensure_ascii=False)

    @classmethod
    def _py_tuple_filter(cls, values: Iterable[Any], indent: int = 4) -> str:
        """Render strings as a tuple literal, one item per line."""
        items = [cls._py_string_filter(value) for value in values]
        if not items:
            return "()"
        pad = " " * indent
        body = "".join(f"{pad}    {item},\n" for item in items)
        return f"(\n{body}{pad})"

    @staticmethod
    def _docstring_filter(value: str, indent: int = 4) -> str:
        """Render free text as a triple-quoted docstring body."""
        text = str(value).strip().replace("\\", "\\\\").replace('"', '\\"')
        pad = " " * indent
        lines = text.splitlines() or [""]
        if len(lines) == 1:
            return f'{pad}"""{lines[0]}"""'
        body = "\n".join(f"{pad}{line}" if line.strip() else "" for line in lines)
        return f'{pad}"""\n{body}\n{pad}"""'

    @staticmethod
    def _comment_filter(value: str, indent: int = 0) -> str:
        """Add comment markers to each line."""
        pad = " " * indent
        lines = str(value).strip().splitlines() or [""]
        return "\n".join(f"{pad}# {line}".rstrip() for line in lines)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """
    Create a template engine instance.

    Args:
        template_dir: Directory containing templates (defaults to bundled)

    Returns:
        Configured template engine
    """
    return TemplateEngine(template_dir)
