"""Site-wide metadata and the author's current role.

``APP_CONFIG`` is built once at import time and never changes. Templates,
head/meta generators and navigation read from it directly::

    from devfolio.core.site_config import APP_CONFIG

    APP_CONFIG.current_role.org
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CurrentRole:
    """The author's current position, shown on the home page."""

    title: str = ""
    org: str = ""
    org_url: str = ""
    summary: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "org": self.org,
            "orgUrl": self.org_url,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class SiteConfig:
    """Static site metadata."""

    site_name: str = ""
    title: str = ""
    description: str = ""
    author: str = ""
    locale: str = "en"
    current_role: CurrentRole = field(default_factory=CurrentRole)

    def as_dict(self) -> dict[str, Any]:
        """Return the config with its original key names (``currentRole``)."""
        return {
            "site_name": self.site_name,
            "title": self.title,
            "description": self.description,
            "author": self.author,
            "locale": self.locale,
            "currentRole": self.current_role.as_dict(),
        }


APP_CONFIG = SiteConfig(
    site_name="KGDEV.me",
    title="Kieran Gray",
    description="Kieran Gray dev blog",
    author="Kieran Gray",
    locale="en",
    current_role=CurrentRole(
        title="Software Engineer",
        org="Prima Assicurazioni",
        org_url="https://helloprima.com",
        summary=(
            "Building Elixir services (plus a bit of Elm) in insurance. "
            "Sharpening my skills in Elixir, event sourcing, and DDD as I go."
        ),
    ),
)
