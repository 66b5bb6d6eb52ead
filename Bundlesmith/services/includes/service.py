"""
Include Resolution Service.

Builds the ordered list of runtime files a bundle loads. Order is load order:
engine core first, then the helpers used by generated events code, then the
optional debugger client, then one rendering backend.
"""

from __future__ import annotations

from collections.abc import Iterable

from ...core.logging import get_logger
from ...models.export import RendererBackend
from ...models.includes import IncludeList
from ...models.project import Project

logger = get_logger(__name__)

# Must be loaded before any events generated code
COMMON_INCLUDES: tuple[str, ...] = (
    "libs/jshashtable.js",
    "gd.js",
    "gd-splash-image.js",
    "libs/hshg.js",
    "libs/rbush.js",
    "inputmanager.js",
    "jsonmanager.js",
    "timemanager.js",
    "runtimeobject.js",
    "profiler.js",
    "runtimescene.js",
    "scenestack.js",
    "polygon.js",
    "force.js",
    "layer.js",
    "timer.js",
    "runtimegame.js",
    "variable.js",
    "variablescontainer.js",
    "oncetriggers.js",
    "runtimebehavior.js",
    "spriteruntimeobject.js",
)

EVENTS_TOOLS_INCLUDES: tuple[str, ...] = (
    "events-tools/commontools.js",
    "events-tools/runtimescenetools.js",
    "events-tools/inputtools.js",
    "events-tools/objecttools.js",
    "events-tools/cameratools.js",
    "events-tools/soundtools.js",
    "events-tools/storagetools.js",
    "events-tools/stringtools.js",
    "events-tools/windowtools.js",
    "events-tools/networktools.js",
)

DEBUGGER_CLIENT_INCLUDES: tuple[str, ...] = (
    "websocket-debugger-client/hot-reloader.js",
    "websocket-debugger-client/websocket-debugger-client.js",
)

RENDERER_INCLUDES: dict[RendererBackend, tuple[str, ...]] = {
    RendererBackend.PIXI: (
        "pixi-renderers/pixi.js",
        "pixi-renderers/pixi-filters-tools.js",
        "pixi-renderers/runtimegame-pixi-renderer.js",
        "pixi-renderers/runtimescene-pixi-renderer.js",
        "pixi-renderers/layer-pixi-renderer.js",
        "pixi-renderers/pixi-image-manager.js",
        "pixi-renderers/spriteruntimeobject-pixi-renderer.js",
        "pixi-renderers/loadingscreen-pixi-renderer.js",
        "howler-sound-manager/howler.min.js",
        "howler-sound-manager/howler-sound-manager.js",
        "fontfaceobserver-font-manager/fontfaceobserver.js",
        "fontfaceobserver-font-manager/fontfaceobserver-font-manager.js",
    ),
    RendererBackend.COCOS: (
        "cocos-renderers/cocos-director-manager.js",
        "cocos-renderers/cocos-image-manager.js",
        "cocos-renderers/cocos-tools.js",
        "cocos-renderers/layer-cocos-renderer.js",
        "cocos-renderers/loadingscreen-cocos-renderer.js",
        "cocos-renderers/runtimegame-cocos-renderer.js",
        "cocos-renderers/runtimescene-cocos-renderer.js",
        "cocos-renderers/spriteruntimeobject-cocos-renderer.js",
        "cocos-sound-manager/cocos-sound-manager.js",
        "fontfaceobserver-font-manager/fontfaceobserver.js",
        "fontfaceobserver-font-manager/fontfaceobserver-font-manager.js",
    ),
}

# Substrings identifying files that only work with one backend
BACKEND_MARKERS: dict[RendererBackend, tuple[str, ...]] = {
    RendererBackend.PIXI: ("pixi-renderer", "pixi-filter"),
    RendererBackend.COCOS: ("cocos-renderer", "cocos-shader"),
}


class IncludeResolver:
    """Resolves the runtime includes of a bundle.

    Purely in-memory: files are only looked up when they are copied.
    """

    def __init__(self, includes: IncludeList | None = None) -> None:
        self.includes = includes if includes is not None else IncludeList()

    def add_libs_include(
        self,
        backend: RendererBackend | None = RendererBackend.PIXI,
        websocket_debugger_client: bool = False,
    ) -> IncludeList:
        """Add the baseline includes of the runtime.

        Args:
            backend: Rendering backend whose files are added, None for none.
            websocket_debugger_client: Add the debugger client and hot-reloader.

        Returns:
            The updated include list.
        """
        self.includes.extend(COMMON_INCLUDES)
        self.includes.extend(EVENTS_TOOLS_INCLUDES)

        if websocket_debugger_client:
            self.includes.extend(DEBUGGER_CLIENT_INCLUDES)

        if backend is not None:
            self.includes.extend(RENDERER_INCLUDES[backend])

        logger.debug(
            "Baseline includes added",
            backend=backend.value if backend else None,
            debugger=websocket_debugger_client,
            total=len(self.includes),
        )
        return self.includes

    def add_effect_includes(self, project: Project) -> IncludeList:
        """Add the include files of the effects used by layers.

        Effects register themselves to the engine, so they come after the
        engine libraries.
        """
        effect_includes: set[str] = set()
        for layout in project.layouts:
            for layer in layout.layers:
                for effect in layer.effects:
                    effect_includes.update(effect.include_files)

        self.includes.extend(sorted(effect_includes))
        return self.includes

    def remove_includes(self, backends: Iterable[RendererBackend]) -> list[str]:
        """Strip the files specific to the given backends.

        Args:
            backends: Backends whose files must not be bundled.

        Returns:
            The removed includes.
        """
        removed: list[str] = []
        for backend in backends:
            removed.extend(self.includes.remove_matching(BACKEND_MARKERS[backend]))

        if removed:
            logger.debug("Backend includes removed", removed=len(removed))
        return removed
