"""
Target File Templating Service.

Each deployment target ships static template files in the runtime root
(bootstrap page, manifests). A templater reads them, substitutes its own closed
set of placeholder tokens and writes the completed files into the bundle.
Tokens a template does not contain are ignored, as are leftover tokens.
"""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar

from ...core.exceptions import FileSystemError, TemplateError
from ...core.logging import get_logger
from ...core.template import mangle_name, replace_tokens, to_json, to_xml_escaped
from ...models.export import ExportContext, ExportTarget
from ...models.project import Project
from ...storage import AbstractFileSystem

logger = get_logger(__name__)

ANDROID_ICON_DENSITIES: tuple[tuple[str, str], ...] = (
    ("36", "ldpi"),
    ("48", "mdpi"),
    ("72", "hdpi"),
    ("96", "xhdpi"),
    ("144", "xxhdpi"),
    ("192", "xxxhdpi"),
)

IOS_ICON_SIZES: tuple[str, ...] = (
    "180", "60", "120", "76", "152", "40", "80", "57",
    "114", "72", "144", "167", "29", "58", "50", "100",
)

ADMOB_PLUGIN_TEMPLATE = (
    '<plugin name="cordova-plugin-admob-free" spec="~0.21.0">\n'
    '\t\t<variable name="ADMOB_APP_ID" value="ADMOB_APP_ID_VALUE" />\n'
    "\t</plugin>"
)


class TargetFileTemplater(ABC):
    """Writes the manifest and bootstrap files of one export target."""

    target: ClassVar[ExportTarget]

    def __init__(self, fs: AbstractFileSystem, runtime_root: str) -> None:
        """Initialize the templater.

        Args:
            fs: File system used to read templates and write files.
            runtime_root: Directory holding the runtime templates.
        """
        self.fs = fs
        self.runtime_root = runtime_root

    def write_files(self, context: ExportContext) -> bool:
        """Complete and write every file of the target.

        Args:
            context: The export being completed.

        Returns:
            True on success. On failure, the reason is in ``context.last_error``.
        """
        try:
            self._write_files(context)
        except (TemplateError, FileSystemError) as e:
            logger.error("Target files could not be written", target=self.target.value, error=str(e))
            return context.fail(e.message)

        logger.info("Target files written", target=self.target.value)
        return True

    @abstractmethod
    def _write_files(self, context: ExportContext) -> None:
        """Write the target files, raising on failure."""
        ...

    def read_template(self, relative_path: str) -> str:
        """Read a template file of the runtime root.

        Raises:
            TemplateError: If the template cannot be read.
        """
        path = posixpath.join(self.runtime_root, relative_path)
        try:
            return self.fs.read_file(path)
        except FileSystemError as e:
            raise TemplateError(
                message=f"Unable to read template {path}",
                template_path=path,
                target=self.target.value,
                cause=e,
            ) from e

    def write(self, path: str, content: str, description: str) -> None:
        """Write a completed file.

        Raises:
            TemplateError: If the file cannot be written.
        """
        try:
            self.fs.write_file(path, content)
        except FileSystemError as e:
            raise TemplateError(
                message=f"Unable to write {description}.",
                template_path=path,
                target=self.target.value,
                cause=e,
            ) from e

    def copy_runtime_file(self, relative_path: str, destination: str, description: str) -> None:
        try:
            self.fs.copy_file(posixpath.join(self.runtime_root, relative_path), destination)
        except FileSystemError as e:
            raise TemplateError(
                message=f"Unable to write {description}.",
                template_path=relative_path,
                target=self.target.value,
                cause=e,
            ) from e

    def package_json_tokens(self, project: Project) -> list[tuple[str, str]]:
        """Tokens shared by the package.json of the wrappers."""
        mangled_name = mangle_name(project.name).lower().replace(" ", "-")
        return [
            ('"GDJS_GAME_NAME"', to_json(project.name)),
            ('"GDJS_GAME_AUTHOR"', to_json(project.author)),
            ('"GDJS_GAME_VERSION"', to_json(project.version)),
            ('"GDJS_GAME_MANGLED_NAME"', to_json(mangled_name)),
        ]


class IndexFileTemplater(TargetFileTemplater):
    """Bootstrap page loading every bundled script."""

    target = ExportTarget.WEB
    index_template = "index.html"
    additional_spec = ""

    def _write_files(self, context: ExportContext) -> None:
        self.write_index_file(context, context.includes, self.additional_spec)

    def write_index_file(
        self, context: ExportContext, includes: Iterable[str], additional_spec: str
    ) -> None:
        content = self.read_template(self.index_template)
        content = self.complete_index_file(context, content, includes, additional_spec)
        self.write(posixpath.join(context.export_dir, "index.html"), content, "index file")

    def complete_index_file(
        self,
        context: ExportContext,
        content: str,
        includes: Iterable[str],
        additional_spec: str,
    ) -> str:
        """Fill the script tags and the runtime options of a bootstrap page.

        Relative includes missing from the export directory are skipped with a
        warning; absolute includes (URLs) are referenced as is.
        """
        code_files_includes = ""
        for include in includes:
            if self.fs.is_absolute(include):
                script_src = include
            else:
                path = posixpath.join(context.export_dir, include)
                if not self.fs.file_exists(path):
                    context.warn(f"Unable to find {path}.", include=include)
                    continue
                script_src = self.fs.make_relative(path, context.export_dir)

            code_files_includes += f'\t<script src="{script_src}" crossorigin="anonymous"></script>\n'

        return replace_tokens(
            content,
            [
                ("/* GDJS_CUSTOM_STYLE */", ""),
                ("<!-- GDJS_CUSTOM_HTML -->", ""),
                ("<!-- GDJS_CODE_FILES -->", code_files_includes),
                ("{}/*GDJS_ADDITIONAL_SPEC*/", additional_spec or "{}"),
            ],
        )


class PreviewTemplater(IndexFileTemplater):
    """Bootstrap page of a preview, reading the runtime options from data.js."""

    target = ExportTarget.PREVIEW
    additional_spec = "gdjs.runtimeGameOptions"


class WebTemplater(IndexFileTemplater):
    """Bootstrap page of a plain HTML5 build."""

    target = ExportTarget.WEB


class CordovaTemplater(IndexFileTemplater):
    """Cordova project: config.xml and package.json around the www bundle."""

    target = ExportTarget.CORDOVA

    def _write_files(self, context: ExportContext) -> None:
        super()._write_files(context)
        project = context.project

        config = replace_tokens(
            self.read_template("Cordova/config.xml"),
            [
                ("GDJS_PROJECTNAME", to_xml_escaped(project.name)),
                ("GDJS_PACKAGENAME", to_xml_escaped(project.package_name)),
                ("GDJS_ORIENTATION", project.orientation),
                ("GDJS_PROJECTVERSION", project.version),
                ("<!-- GDJS_ICONS_ANDROID -->", self.make_icons_android(project)),
                ("<!-- GDJS_ICONS_IOS -->", self.make_icons_ios(project)),
            ],
        )
        if project.ad_mob_app_id:
            config = replace_tokens(
                config,
                [
                    (
                        "<!-- GDJS_ADMOB_PLUGIN_AND_APPLICATION_ID -->",
                        ADMOB_PLUGIN_TEMPLATE.replace("ADMOB_APP_ID_VALUE", to_xml_escaped(project.ad_mob_app_id)),
                    )
                ],
            )
        self.write(posixpath.join(context.export_path, "config.xml"), config, "Cordova config.xml file")

        package_json = replace_tokens(
            self.read_template("Cordova/package.json"), self.package_json_tokens(project)
        )
        self.write(
            posixpath.join(context.export_path, "package.json"), package_json, "Cordova package.json file"
        )

    @staticmethod
    def _icon_file(project: Project, platform: str, name: str) -> str:
        file = project.get_platform_asset_file(platform, name)
        return "www/" + file if file else ""

    def make_icons_android(self, project: Project) -> str:
        output = ""
        for size, density in ANDROID_ICON_DENSITIES:
            file = self._icon_file(project, "android", f"icon-{size}")
            if file:
                output += f'<icon src="{file}" density="{density}" />\n'
        return output

    def make_icons_ios(self, project: Project) -> str:
        output = ""
        for size in IOS_ICON_SIZES:
            file = self._icon_file(project, "ios", f"icon-{size}")
            if file:
                output += f'<icon src="{file}" width="{size}" height="{size}" />\n'
        return output


class ElectronTemplater(IndexFileTemplater):
    """Electron application: package.json, main.js and the desktop icon."""

    target = ExportTarget.ELECTRON

    def _write_files(self, context: ExportContext) -> None:
        super()._write_files(context)
        project = context.project
        package_tokens = self.package_json_tokens(project)

        package_json = replace_tokens(self.read_template("Electron/package.json"), package_tokens)
        self.write(
            posixpath.join(context.export_dir, "package.json"), package_json, "Electron package.json file"
        )

        main_js = replace_tokens(
            self.read_template("Electron/main.js"),
            [
                ("800 /*GDJS_WINDOW_WIDTH*/", str(project.game_resolution_width)),
                ("600 /*GDJS_WINDOW_HEIGHT*/", str(project.game_resolution_height)),
                package_tokens[0],
            ],
        )
        self.write(posixpath.join(context.export_dir, "main.js"), main_js, "Electron main.js file")

        self._copy_icon(context)

    def _copy_icon(self, context: ExportContext) -> None:
        build_resources = posixpath.join(context.export_dir, "buildResources")
        try:
            self.fs.mkdir(build_resources)
        except FileSystemError as e:
            raise TemplateError(message="Unable to create buildResources directory.", cause=e) from e

        icon_file = context.project.get_platform_asset_file("desktop", "icon-512")
        if not icon_file:
            return

        # The resource was already exported: the copy in the bundle is the one to use
        icon_path = self.fs.make_absolute(icon_file, context.export_dir)
        if self.fs.file_exists(icon_path):
            try:
                self.fs.copy_file(icon_path, posixpath.join(build_resources, "icon.png"))
            except FileSystemError as e:
                context.warn(f"Could not copy desktop icon {icon_path}", error=str(e))
        else:
            context.warn(f"Desktop icon not found: {icon_path}")


class FacebookInstantGamesTemplater(IndexFileTemplater):
    """Facebook Instant Games bundle: fbapp-config.json."""

    target = ExportTarget.FACEBOOK_INSTANT_GAMES

    def _write_files(self, context: ExportContext) -> None:
        super()._write_files(context)
        orientation = '"PORTRAIT"' if context.project.orientation == "portrait" else '"LANDSCAPE"'
        config = replace_tokens(
            self.read_template("FacebookInstantGames/fbapp-config.json"),
            [('"GDJS_ORIENTATION"', orientation)],
        )
        self.write(
            posixpath.join(context.export_dir, "fbapp-config.json"),
            config,
            "Facebook Instant Games fbapp-config.json file",
        )


class Cocos2dTemplater(IndexFileTemplater):
    """Cocos2d-JS project: the engine, its bootstrap and project.json."""

    target = ExportTarget.COCOS2D
    cocos_library = "cocos2d-js-v3.10.js"

    def _write_files(self, context: ExportContext) -> None:
        export_dir = context.export_dir
        self.copy_runtime_file("Cocos2d/main.js", posixpath.join(export_dir, "main.js"), "Cocos2d main.js file")
        self.copy_runtime_file(
            f"Cocos2d/{self.cocos_library}",
            posixpath.join(export_dir, self.cocos_library),
            f"Cocos2d {self.cocos_library} file",
        )

        # Scripts are loaded by the engine from project.json, not by the page
        index = self.complete_index_file(context, self.read_template("Cocos2d/index.html"), [], "")
        self.write(posixpath.join(export_dir, "index.html"), index, "Cocos2d-JS index.html file")

        include_files = []
        for include in context.includes:
            path = posixpath.join(export_dir, "src", include)
            if not self.fs.file_exists(path):
                context.warn(f"Unable to find {path}.", include=include)
                continue
            include_files.append(f'"src/{include}"\n')

        project_json = replace_tokens(
            self.read_template("Cocos2d/project.json"),
            [
                ("// GDJS_INCLUDE_FILES", ", ".join(include_files)),
                ("/*GDJS_SHOW_FPS*/", "true" if context.options.debug_mode else "false"),
            ],
        )
        self.write(posixpath.join(export_dir, "project.json"), project_json, "Cocos2d-JS project.json file")


TEMPLATERS: dict[ExportTarget, type[TargetFileTemplater]] = {
    ExportTarget.PREVIEW: PreviewTemplater,
    ExportTarget.WEB: WebTemplater,
    ExportTarget.CORDOVA: CordovaTemplater,
    ExportTarget.ELECTRON: ElectronTemplater,
    ExportTarget.FACEBOOK_INSTANT_GAMES: FacebookInstantGamesTemplater,
    ExportTarget.COCOS2D: Cocos2dTemplater,
}


def get_templater(target: ExportTarget, fs: AbstractFileSystem, runtime_root: str) -> TargetFileTemplater:
    """Get the templater of an export target."""
    return TEMPLATERS[target](fs, runtime_root)
