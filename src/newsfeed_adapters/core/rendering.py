"""HTML fragment rendering with Jinja2.

Source adapters ship their description templates under
``newsfeed_adapters/templates/<source>/``.  :class:`TemplateRenderer` wraps a
single Jinja2 environment so templates are compiled once per process.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape


class TemplateRenderer:
    """Render structured payloads into HTML fragments.

    Args:
        environment: Optional pre-built Jinja2 environment.  Defaults to one
            loading from the ``newsfeed_adapters`` package ``templates``
            directory with HTML autoescaping enabled.
    """

    def __init__(self, environment: Environment | None = None) -> None:
        self._env = environment or Environment(
            loader=PackageLoader("newsfeed_adapters", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, template_name: str, data: Mapping[str, Any]) -> str:
        """Render *template_name* with *data* as the template context.

        Args:
            template_name: Path relative to the templates root, e.g.
                ``"reuters/description.html"``.
            data: Template variables.

        Returns:
            The rendered HTML fragment with surrounding whitespace stripped.
        """
        template = self._env.get_template(template_name)
        return template.render(**data).strip()
