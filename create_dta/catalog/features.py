"""Registry of the feature packages that can be layered onto a project."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FeatureDescriptor(BaseModel):
    """Human-facing description of a feature package."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str


FEATURE_REGISTRY: dict[str, FeatureDescriptor] = {
    "rbac": FeatureDescriptor(title="RBAC", description="Role-Based Access Control"),
    "feature-flags": FeatureDescriptor(title="Feature Flags", description="Feature toggle system"),
}


def is_known_feature(feature: str) -> bool:
    return feature in FEATURE_REGISTRY
