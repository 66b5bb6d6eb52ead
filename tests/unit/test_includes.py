"""Unit tests for include resolution."""

from Bundlesmith.models.export import RendererBackend
from Bundlesmith.models.includes import IncludeList
from Bundlesmith.models.project import Effect, Layer, Layout, Project
from Bundlesmith.services.includes import (
    COMMON_INCLUDES,
    DEBUGGER_CLIENT_INCLUDES,
    EVENTS_TOOLS_INCLUDES,
    RENDERER_INCLUDES,
    IncludeResolver,
)


class TestIncludeResolver:
    """Tests for the include resolver."""

    def test_baseline_order(self):
        """Test that the engine comes first and the renderer last."""
        includes = IncludeResolver().add_libs_include(RendererBackend.PIXI)

        expected = list(COMMON_INCLUDES) + list(EVENTS_TOOLS_INCLUDES) + list(RENDERER_INCLUDES[RendererBackend.PIXI])
        assert includes.to_list() == expected
        assert includes.to_list()[0] == "libs/jshashtable.js"

    def test_baseline_is_idempotent(self):
        resolver = IncludeResolver()
        once = resolver.add_libs_include(RendererBackend.PIXI).to_list()

        twice = resolver.add_libs_include(RendererBackend.PIXI).to_list()

        assert once == twice

    def test_debugger_client_before_renderer(self):
        includes = IncludeResolver().add_libs_include(
            RendererBackend.PIXI, websocket_debugger_client=True
        ).to_list()

        debugger_position = includes.index(DEBUGGER_CLIENT_INCLUDES[0])
        assert debugger_position > includes.index(EVENTS_TOOLS_INCLUDES[-1])
        assert debugger_position < includes.index("pixi-renderers/pixi.js")

    def test_no_backend(self):
        includes = IncludeResolver().add_libs_include(None).to_list()
        assert includes == list(COMMON_INCLUDES) + list(EVENTS_TOOLS_INCLUDES)

    def test_existing_includes_keep_their_position(self):
        """Test that files added earlier are not moved by the baseline."""
        includes = IncludeList(["runtimegame.js", "custom.js"])

        IncludeResolver(includes).add_libs_include(RendererBackend.PIXI)

        assert includes.to_list()[:2] == ["runtimegame.js", "custom.js"]
        assert includes.to_list().count("runtimegame.js") == 1

    def test_remove_backend_includes(self):
        resolver = IncludeResolver()
        resolver.add_libs_include(RendererBackend.PIXI)

        removed = resolver.remove_includes([RendererBackend.PIXI])

        assert removed
        assert all("pixi-renderer" in include or "pixi-filter" in include for include in removed)
        assert not any("pixi-renderers/" in include for include in resolver.includes)
        # Files shared by both backends are kept
        assert "fontfaceobserver-font-manager/fontfaceobserver.js" in resolver.includes

    def test_remove_then_readd_restores_backend_at_end(self):
        """Test removing a backend then adding the baseline again.

        Verifies the backend's own files come back, in order, at the end of
        the list.
        """
        resolver = IncludeResolver()
        resolver.add_libs_include(RendererBackend.PIXI)
        removed = resolver.remove_includes([RendererBackend.PIXI])

        resolver.add_libs_include(RendererBackend.PIXI)

        assert resolver.includes.to_list()[-len(removed):] == removed

    def test_switch_backend(self):
        resolver = IncludeResolver()
        resolver.add_libs_include(RendererBackend.COCOS)
        resolver.remove_includes([RendererBackend.PIXI])

        includes = resolver.includes.to_list()

        assert "cocos-renderers/runtimegame-cocos-renderer.js" in includes
        assert not any("pixi" in include for include in includes)

    def test_effect_includes(self):
        """Test that effect files are added once, in a stable order."""
        project = Project(
            layouts=[
                Layout(
                    name="Main",
                    layers=[
                        Layer(effects=[Effect(name="glow", effect_type="Glow", include_files=["effects/glow.js"])]),
                        Layer(
                            name="UI",
                            effects=[
                                Effect(name="blur", effect_type="Blur", include_files=["effects/blur.js"]),
                                Effect(name="glow2", effect_type="Glow", include_files=["effects/glow.js"]),
                            ],
                        ),
                    ],
                )
            ]
        )
        resolver = IncludeResolver()
        resolver.add_libs_include(RendererBackend.PIXI)

        resolver.add_effect_includes(project)

        assert resolver.includes.to_list()[-2:] == ["effects/blur.js", "effects/glow.js"]
