"""Exception hierarchy for monorepo-health."""

from .base import MonorepoHealthError
from .config import ConfigurationError, InvalidConfigError
from .workspace import (
    DuplicatePackageError,
    MalformedInputError,
    ManifestError,
    MissingDescriptorFieldError,
)

__all__ = [
    "MonorepoHealthError",
    "MalformedInputError",
    "DuplicatePackageError",
    "MissingDescriptorFieldError",
    "ManifestError",
    "ConfigurationError",
    "InvalidConfigError",
]
