"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .name_rules import (
    DEFAULT_FILTER_CONFIG,
    FilterConfig,
    NameExclusionRules,
    has_allowed_extension,
    should_ignore_file,
    should_ignore_folder,
)

__all__ = [
    "BaseExclusionRules",
    "DEFAULT_FILTER_CONFIG",
    "FilterConfig",
    "NameExclusionRules",
    "has_allowed_extension",
    "should_ignore_file",
    "should_ignore_folder",
]
