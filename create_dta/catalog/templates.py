"""Base Turborepo templates offered by the CLI."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

CUSTOM_TEMPLATE_KEY = "custom"


class TemplateDescriptor(BaseModel):
    """A named base template and where to fetch it from."""

    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    description: str
    fetch_locator: str


def _descriptor(key: str, display_name: str, description: str, fetch_locator: str) -> tuple[str, TemplateDescriptor]:
    return key, TemplateDescriptor(
        key=key,
        display_name=display_name,
        description=description,
        fetch_locator=fetch_locator,
    )


TURBOREPO_TEMPLATES: dict[str, TemplateDescriptor] = dict(
    [
        _descriptor(
            "with-tailwind",
            "With Tailwind CSS",
            "Next.js with Tailwind CSS (recommended)",
            "vercel/turborepo/examples/with-tailwind",
        ),
        _descriptor(
            "basic",
            "Basic",
            "Simple Next.js starter",
            "vercel/turborepo/examples/basic",
        ),
        _descriptor(
            "design-system",
            "Design System",
            "React component library with Storybook",
            "vercel/turborepo/examples/design-system",
        ),
        _descriptor(
            "with-changesets",
            "With Changesets",
            "Package versioning and publishing",
            "vercel/turborepo/examples/with-changesets",
        ),
        _descriptor(
            "kitchen-sink",
            "Kitchen Sink",
            "All features showcase",
            "vercel/turborepo/examples/kitchen-sink",
        ),
        # The locator for this entry comes from the user.
        _descriptor(
            CUSTOM_TEMPLATE_KEY,
            "Custom GitHub URL",
            "Use any GitHub repository (owner/repo/path)",
            "",
        ),
    ]
)


def resolve_template(key: str) -> TemplateDescriptor | None:
    """Return the catalog entry for *key*, or ``None`` when it is not a catalog key."""
    return TURBOREPO_TEMPLATES.get(key)


def resolve_locator(key_or_locator: str, custom_locator: str | None = None) -> str:
    """Turn a catalog key or a raw ``owner/repo[/path]`` locator into a fetch locator.

    Raises:
        ValueError: If *key_or_locator* is ``custom`` and no *custom_locator*
            was supplied.
    """
    descriptor = resolve_template(key_or_locator)
    if descriptor is None:
        return key_or_locator
    if descriptor.key == CUSTOM_TEMPLATE_KEY:
        if not custom_locator:
            raise ValueError("The 'custom' template requires a repository locator (owner/repo/path)")
        return custom_locator
    return descriptor.fetch_locator
