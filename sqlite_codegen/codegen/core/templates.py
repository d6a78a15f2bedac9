"""
Jinja2 rendering for generated source files.

Templates render with StrictUndefined so a missing context variable fails
loudly instead of producing half-written code. Whitespace control
(``trim_blocks``/``lstrip_blocks``) keeps block tags off the output lines.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def python_literal(value: Any) -> str:
    """``users`` -> ``'users'``"""
    return repr(str(value))


def js_literal(value: Any) -> str:
    """Double-quoted TypeScript string; JSON escaping is valid there."""
    return json.dumps(str(value))


def comment_lines(value: Any, marker: str = "#") -> str:
    """Prefix every line with ``marker``; blank lines get the bare marker."""
    return "\n".join(
        f"{marker} {line}" if line.strip() else marker for line in str(value).split("\n")
    )


FILTERS: Dict[str, Callable[..., str]] = {
    "pystr": python_literal,
    "jsstr": js_literal,
    "comment": comment_lines,
}


class TemplateEngine:
    """A Jinja2 environment bound to one language's template directory."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir

        loader: BaseLoader
        if template_dir is not None and template_dir.is_dir():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters.update(FILTERS)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render ``template_name`` from the template directory.

        Raises:
            TemplateError: If the template is missing or fails to render.
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    return TemplateEngine(template_dir)
