"""dscc-gen scaffolder -- materializes viz and connector projects.

Quick usage::

    from dscc_gen.scaffolder import ProjectGenerator

    generator = ProjectGenerator(config)
    project_path = await generator.generate()
    await generator.install_dependencies(project_path)
"""

from dscc_gen.scaffolder.generator import ProjectGenerator
from dscc_gen.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectGenerator",
    "TemplateRenderer",
]
