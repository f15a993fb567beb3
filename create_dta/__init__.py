"""create-dta -- scaffold Turborepo monorepos with optional DTA feature packages.

Quick usage::

    from create_dta.composer import ProjectComposer, ProjectComposition

    composition = ProjectComposition(
        project_name="my-app",
        base_template_locator="vercel/turborepo/examples/with-tailwind",
        features=("rbac",),
        package_manager="pnpm",
        skip_install=True,
    )
    result = await ProjectComposer().compose(composition)
"""

__version__ = "1.0.0"
