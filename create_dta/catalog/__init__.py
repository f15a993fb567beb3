"""Static catalogs: pinned versions, base templates and feature packages."""

from create_dta.catalog.features import FEATURE_REGISTRY, FeatureDescriptor, is_known_feature
from create_dta.catalog.templates import (
    CUSTOM_TEMPLATE_KEY,
    TURBOREPO_TEMPLATES,
    TemplateDescriptor,
    resolve_locator,
    resolve_template,
)
from create_dta.catalog.versions import VERSION_CATALOG, VersionCatalog, version_for

__all__ = [
    "CUSTOM_TEMPLATE_KEY",
    "FEATURE_REGISTRY",
    "FeatureDescriptor",
    "TURBOREPO_TEMPLATES",
    "TemplateDescriptor",
    "VERSION_CATALOG",
    "VersionCatalog",
    "is_known_feature",
    "resolve_locator",
    "resolve_template",
    "version_for",
]
