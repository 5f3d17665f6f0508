"""Pydantic models for portfolio project content.

These models are the normalized shape of a ``projects`` collection entry.
Raw frontmatter goes in through :func:`devfolio.core.validator.validate`
and a frozen ``ProjectEntry`` comes out with every default applied.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Optional
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic_core import PydanticCustomError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ComponentType(str, Enum):
    """Kinds of deployable unit inside a project."""
    FRONTEND = "frontend"
    BACKEND = "backend"
    INFRA = "infra"
    WORKER = "worker"
    DB = "db"
    MOBILE = "mobile"


class ProjectStatus(str, Enum):
    """Lifecycle state of a project."""
    ACTIVE = "active"
    PAUSED = "paused"
    ARCHIVED = "archived"


# ---------------------------------------------------------------------------
# URL fields
# ---------------------------------------------------------------------------

def check_absolute_url(value: str) -> str:
    """Accept ``scheme://authority...`` strings, any scheme.

    The value is returned untouched so a normalized entry keeps the URL
    exactly as the author wrote it.
    """
    if not value or any(ch.isspace() for ch in value):
        raise PydanticCustomError("url_absolute", "Invalid URL: {reason}", {"reason": "empty or contains whitespace"})
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        raise PydanticCustomError("url_absolute", "Invalid URL: {reason}", {"reason": str(exc)}) from exc
    if not parts.scheme:
        raise PydanticCustomError("url_absolute", "Invalid URL: {reason}", {"reason": "missing scheme"})
    if not parts.netloc or not parts.hostname:
        raise PydanticCustomError("url_absolute", "Invalid URL: {reason}", {"reason": "missing host"})
    return value


AbsoluteUrl = Annotated[StrictStr, AfterValidator(check_absolute_url)]


def check_ordered_sequence(value: Any) -> Any:
    """Only lists and tuples are ordered sequences; sets and mappings are not."""
    if isinstance(value, (list, tuple)):
        return value
    raise PydanticCustomError("sequence_type", "Input should be a list")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

class HostingDescriptor(_Frozen):
    """Where a service or component runs."""
    provider: StrictStr
    service: Optional[StrictStr] = None
    url: Optional[AbsoluteUrl] = None


class ComponentDescriptor(_Frozen):
    """One deployable unit inside a project."""
    name: StrictStr
    type: ComponentType
    language: StrictStr
    framework: Optional[StrictStr] = None
    repo: Optional[StrictStr] = None
    github: Optional[AbsoluteUrl] = None
    package_manager: Optional[StrictStr] = Field(default=None, alias="packageManager")
    hosting: Optional[HostingDescriptor] = None
    notes: tuple[StrictStr, ...] = ()

    @field_validator("notes", mode="before")
    @classmethod
    def _ordered(cls, value: Any) -> Any:
        return check_ordered_sequence(value)


class RepositoryDescriptor(_Frozen):
    """A source repository linked to a project."""
    name: StrictStr
    url: AbsoluteUrl
    role: StrictStr
    private: Optional[StrictBool] = None


class TechStack(_Frozen):
    """Languages and frameworks a project is built with."""
    languages: tuple[StrictStr, ...] = ()
    frameworks: tuple[StrictStr, ...] = ()

    @field_validator("languages", "frameworks", mode="before")
    @classmethod
    def _ordered(cls, value: Any) -> Any:
        return check_ordered_sequence(value)


class ProjectImages(_Frozen):
    """Image paths (or URLs) used on the project page."""
    logo: Optional[StrictStr] = None
    architecture: Optional[StrictStr] = None


# ---------------------------------------------------------------------------
# Project entry
# ---------------------------------------------------------------------------

class ProjectEntry(_Frozen):
    """A validated, normalized portfolio project.

    Every optional sequence is present (possibly empty) and ``tech`` always
    carries both of its lists, so consumers never branch on absence.
    """
    name: StrictStr
    summary: StrictStr
    website: Optional[AbsoluteUrl] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    tags: tuple[StrictStr, ...] = ()
    tech: TechStack = Field(default_factory=TechStack)
    hosting: tuple[HostingDescriptor, ...] = ()
    repos: tuple[RepositoryDescriptor, ...] = ()
    components: tuple[ComponentDescriptor, ...] = ()
    images: Optional[ProjectImages] = None

    @field_validator("tags", "hosting", "repos", "components", mode="before")
    @classmethod
    def _ordered(cls, value: Any) -> Any:
        return check_ordered_sequence(value)

    def to_record(self) -> dict[str, Any]:
        """Return the entry as plain JSON-compatible data using wire keys.

        Optional fields that are unset are left out, mirroring how the
        author would have written them. Validating the result again gives
        an equal entry.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @property
    def component_types(self) -> list[ComponentType]:
        """Distinct component types, in first-seen order."""
        seen: list[ComponentType] = []
        for c in self.components:
            if c.type not in seen:
                seen.append(c.type)
        return seen
