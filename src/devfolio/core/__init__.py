"""Project content schema, validation, loading and site configuration."""

from .errors import (  # noqa: F401
    CollectionNotFoundError,
    ContentLoadError,
    ContentValidationError,
    DuplicateSlugError,
    EntryNotFoundError,
    EntryValidationError,
    FrontmatterError,
    InvalidEnumValue,
    InvalidURL,
    MissingOrInvalidField,
)
from .models import (  # noqa: F401
    ComponentDescriptor,
    ComponentType,
    HostingDescriptor,
    ProjectEntry,
    ProjectImages,
    ProjectStatus,
    RepositoryDescriptor,
    TechStack,
)
from .site_config import APP_CONFIG, CurrentRole, SiteConfig  # noqa: F401
from .validator import collect_issues, is_valid, validate  # noqa: F401
