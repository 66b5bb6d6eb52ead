"""
Resources Export Service.

Copies the files referenced by project resources into the bundle and rewrites
the resources so they point at the copies.
"""

from __future__ import annotations

import posixpath

from ...core.logging import get_logger
from ...models.project import Project, Resource, ResourceKind
from ...storage import AbstractFileSystem

logger = get_logger(__name__)


class ResourcesExporter:
    """Service copying project resources to an export directory."""

    def __init__(self, fs: AbstractFileSystem) -> None:
        """Initialize the exporter.

        Args:
            fs: File system used for every copy
        """
        self.fs = fs

    def project_directory(self, project: Project) -> str:
        """Directory the project's relative paths are resolved against."""
        if not project.project_file:
            return "."
        return self.fs.normalize_separator(self.fs.dir_name_from(project.project_file)) or "."

    def copy_all_resources_to(self, project: Project, export_dir: str) -> list[str]:
        """Copy every resource file to the root of the export directory.

        Files are flattened into the export directory; two different sources
        with the same file name get distinct names. The project is updated to
        reference the copied files.

        Args:
            project: Project to export, modified in place.
            export_dir: Destination directory.

        Returns:
            Warnings for resources whose file could not be copied.

        Raises:
            FileSystemError: If the export directory cannot be written.
        """
        project_dir = self.project_directory(project)
        destinations: dict[str, str] = {}
        used_names: set[str] = set()
        warnings: list[str] = []

        for resource in project.resources:
            if not resource.file or _is_url(resource.file):
                continue

            source = self.fs.make_absolute(resource.file, project_dir)
            if source not in destinations:
                destinations[source] = self._unique_file_name(self.fs.file_name_from(source), used_names)
            destination = destinations[source]

            if not self.fs.file_exists(source):
                message = f"Resource '{resource.name}' file not found: {source}"
                logger.warning("Resource file missing", resource=resource.name, file=source)
                warnings.append(message)
                continue

            self.fs.copy_file(source, posixpath.join(export_dir, destination))
            resource.file = destination

        logger.info("Resources exported", resources=len(project.resources), copied=len(destinations))
        return warnings

    def add_deprecated_font_files_to_font_resources(
        self, project: Project, export_dir: str, url_prefix: str = ""
    ) -> list[str]:
        """Declare a font resource for each font file of the export directory.

        Old projects referenced fonts by file name only, without a font
        resource. A resource named after the relative file name is added for
        each .ttf file found, unless a resource with that name exists.

        Returns:
            Names of the resources that were added.
        """
        added: list[str] = []
        for ttf_file in self.fs.read_dir(export_dir, ".ttf"):
            relative_file = self.fs.make_relative(ttf_file, export_dir)
            font_resource = Resource(
                name=relative_file,
                kind=ResourceKind.FONT,
                file=url_prefix + relative_file,
                user_added=False,
            )
            if project.add_resource(font_resource):
                added.append(relative_file)

        if added:
            logger.info("Deprecated font files declared as resources", fonts=added)
        return added

    @staticmethod
    def _unique_file_name(file_name: str, used_names: set[str]) -> str:
        stem, extension = posixpath.splitext(file_name)
        candidate = file_name
        index = 2
        while candidate.lower() in used_names:
            candidate = f"{stem}{index}{extension}"
            index += 1
        used_names.add(candidate.lower())
        return candidate


def _is_url(path: str) -> bool:
    return "://" in path or path.startswith("data:")

