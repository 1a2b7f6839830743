"""
Front matter and links for the generated command pages.

The front matter is the YAML header the static site generator reads
(title, description, alias URLs and annotations); the link handler maps a
page name to the URL the site serves it at.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

import jinja2

from ..config import DocsConfig
from ..log import Logger
from .collector import CommandDetails

# Annotation naming the flag groups of a command; used by the post-processor
# and kept out of the front matter
GROUPS_ANNOTATION = "groups"

_ENV = jinja2.Environment(
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
    autoescape=False,
)

FRONTMATTER_TEMPLATE = _ENV.from_string(
    """\
---
title: "{{ title }}"
description: "{{ description }}"
{%- if date %}
date: "{{ date }}"
{%- endif %}
{%- if aliases %}
aliases:
{%- for value in aliases %}
  - {{ value }}
{%- endfor %}
{%- endif %}
{%- for key, value in annotations | dictsort(true) %}
{{ key }}: {{ value }}
{%- endfor %}
# autogenerated - DO NOT EDIT, instead edit the source code in {{ source }} \
and as part of making a release run "{{ regenerate_command }}"
---
"""
)


@dataclass
class FrontMatter:
    """Values rendered into a page's front matter."""

    title: str
    description: str
    source: str
    date: str = ""
    aliases: list[str] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)


def page_base(filename: str) -> str:
    """Filename without directory and extension, e.g. "out/app_sub.md" -> "app_sub"."""
    name = os.path.basename(filename)
    return os.path.splitext(name)[0]


def link_handler(name: str, url_prefix: str = "/commands/") -> str:
    """
    Canonical URL of a page.

    Args:
        name: Page filename, e.g. "app_Sub.md"
        url_prefix: URL directory holding the command pages

    Returns:
        str: e.g. "/commands/app_sub/"
    """
    base = os.path.splitext(name)[0]
    return url_prefix + base.lower() + "/"


class FrontMatterRenderer:
    """
    Render the front matter of each generated page.

    Example:
        renderer = FrontMatterRenderer(collect_details(root), DocsConfig(), lg)
        header = renderer.render("docs/commands/app_sub.md")
    """

    def __init__(
        self,
        commands: Mapping[str, CommandDetails],
        config: DocsConfig,
        lg: Logger,
        product_token: str = "",
        now: datetime | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            commands: Output filename -> details, from collect_details()
            config: Documentation settings
            lg: Logger
            product_token: Replaced by config.source_token in the source hint
                when config.product_token is unset
            now: Generation time, the current time when None
        """
        self._commands = commands
        self._config = config
        self._lg = lg
        self._product_token = config.product_token or product_token
        self._now = now or datetime.now(timezone.utc).astimezone()

    def source_hint(self, base: str) -> str:
        """Source location named in the do-not-edit comment."""
        source = base
        if self._product_token:
            source = source.replace(self._product_token, self._config.source_token)
        return source.replace("_", "/") + "/"

    def front_matter(self, filename: str) -> FrontMatter:
        """Build the front matter values for a page; unknown pages get empty details."""
        name = os.path.basename(filename)
        base = page_base(filename)
        details = self._commands.get(name, CommandDetails())
        data = FrontMatter(
            title=base.replace("_", " "),
            description=details.short,
            source=self.source_hint(base),
        )
        if self._config.frontmatter_date:
            data.date = self._now.isoformat(timespec="seconds")
        for alias in details.aliases:
            data.aliases.append(self._config.url_prefix + alias.replace(" ", "_") + "/")
        # Annotations that confuse the site generator are filtered out
        for key, value in details.annotations.items():
            if key != GROUPS_ANNOTATION:
                data.annotations[key] = value
        return data

    def render(self, filename: str) -> str:
        """
        Render the front matter block of a page.

        Exits the process if the template cannot be rendered; with the fixed
        template this only happens on a programming error.
        """
        data = self.front_matter(filename)
        try:
            return FRONTMATTER_TEMPLATE.render(
                title=data.title,
                description=data.description,
                date=data.date,
                aliases=data.aliases,
                annotations=data.annotations,
                source=data.source,
                regenerate_command=self._config.regenerate_command,
            )
        except jinja2.TemplateError as e:
            self._lg.critical(
                "failed to render frontmatter template",
                extra={"file": filename, "exception": e},
            )
            raise SystemExit(1) from e
