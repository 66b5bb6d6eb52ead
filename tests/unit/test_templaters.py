"""Unit tests for the target file templaters."""

import json

import pytest

from Bundlesmith.models.export import ExportContext, ExportOptions, ExportTarget
from Bundlesmith.models.project import Resource
from Bundlesmith.services.templaters import (
    Cocos2dTemplater,
    CordovaTemplater,
    PreviewTemplater,
    WebTemplater,
    get_templater,
)


def make_context(project, target, export_path, export_dir=None, includes=(), **options):
    export_options = ExportOptions(project=project, target=target, export_path=str(export_path), **options)
    context = ExportContext(
        export_id="test",
        options=export_options,
        project=project,
        export_dir=str(export_dir or export_path),
        code_output_dir="",
    )
    context.includes.extend(includes)
    return context


@pytest.fixture
def export_dir(temp_dir):
    """Export directory already holding one bundled runtime file."""
    path = temp_dir / "export"
    path.mkdir()
    (path / "gd.js").write_text("// gd.js\n")
    return path


class TestIndexFileTemplaters:
    """Tests for the bootstrap page."""

    def test_preview_index(self, sample_project, runtime_root, export_dir, file_system):
        """Test the preview bootstrap page.

        Verifies that bundled includes and URLs get script tags, that missing
        files are skipped with a warning and that the runtime options are
        read from data.js.
        """
        context = make_context(
            sample_project,
            ExportTarget.PREVIEW,
            export_dir,
            includes=["gd.js", "missing.js", "https://cdn.example.com/lib.js"],
        )

        assert PreviewTemplater(file_system, str(runtime_root)).write_files(context)

        index = (export_dir / "index.html").read_text()
        assert '\t<script src="gd.js" crossorigin="anonymous"></script>\n' in index
        assert '\t<script src="https://cdn.example.com/lib.js" crossorigin="anonymous"></script>\n' in index
        assert "missing.js" not in index
        assert "new gdjs.RuntimeGame(gdjs.projectData, gdjs.runtimeGameOptions);" in index
        assert "GDJS_CODE_FILES" not in index
        assert "GDJS_CUSTOM_STYLE" not in index
        assert len(context.warnings) == 1
        assert context.last_error == ""

    def test_web_index_has_empty_options(self, sample_project, runtime_root, export_dir, file_system):
        context = make_context(sample_project, ExportTarget.WEB, export_dir, includes=["gd.js"])

        assert WebTemplater(file_system, str(runtime_root)).write_files(context)

        index = (export_dir / "index.html").read_text()
        assert "new gdjs.RuntimeGame(gdjs.projectData, {});" in index

    def test_missing_template_fails(self, sample_project, temp_dir, export_dir, file_system):
        """Test that an unreadable template fails the templater, without raising."""
        context = make_context(sample_project, ExportTarget.WEB, export_dir)

        assert not WebTemplater(file_system, str(temp_dir / "no-runtime")).write_files(context)
        assert context.last_error.startswith("Unable to read template")
        assert context.last_error.endswith("index.html")

    def test_unwritable_output_fails(self, sample_project, runtime_root, temp_dir, file_system):
        (temp_dir / "afile").write_text("")
        context = make_context(sample_project, ExportTarget.WEB, temp_dir / "afile" / "export")

        assert not WebTemplater(file_system, str(runtime_root)).write_files(context)
        assert context.last_error == "Unable to write index file."


class TestCordovaTemplater:
    """Tests for the Cordova templater."""

    def test_config_and_package(self, sample_project, runtime_root, temp_dir, file_system):
        """Test the Cordova config.xml and package.json.

        Verifies they are written next to the www directory, with XML and
        JSON escaping of the project fields.
        """
        sample_project.name = "Tom & Jerry"
        sample_project.resources.append(Resource(name="icon36", file="icons/icon36.png"))
        sample_project.platform_specific_assets = {"android": {"icon-36": "icon36"}}
        www = temp_dir / "cordova" / "www"
        www.mkdir(parents=True)
        context = make_context(sample_project, ExportTarget.CORDOVA, temp_dir / "cordova", export_dir=www)

        assert CordovaTemplater(file_system, str(runtime_root)).write_files(context)

        assert (www / "index.html").exists()
        config = (temp_dir / "cordova" / "config.xml").read_text()
        assert "<name>Tom &amp; Jerry</name>" in config
        assert 'id="com.example.mygame" version="1.2.3"' in config
        assert 'value="landscape"' in config
        assert '<icon src="www/icons/icon36.png" density="ldpi" />' in config
        assert "cordova-plugin-admob-free" not in config

        package = json.loads((temp_dir / "cordova" / "package.json").read_text())
        assert package == {
            "name": "tom_32_38_32jerry",
            "productName": "Tom & Jerry",
            "author": "Someone",
            "version": "1.2.3",
        }

    def test_admob_plugin(self, sample_project, runtime_root, temp_dir, file_system):
        sample_project.ad_mob_app_id = "ca-app-pub-123~456"
        www = temp_dir / "cordova" / "www"
        context = make_context(sample_project, ExportTarget.CORDOVA, temp_dir / "cordova", export_dir=www)

        assert CordovaTemplater(file_system, str(runtime_root)).write_files(context)

        config = (temp_dir / "cordova" / "config.xml").read_text()
        assert '<plugin name="cordova-plugin-admob-free" spec="~0.21.0">' in config
        assert 'value="ca-app-pub-123~456"' in config


class TestOtherTemplaters:
    """Tests for the Electron, Facebook Instant Games and Cocos2d templaters."""

    def test_electron(self, sample_project, runtime_root, export_dir, file_system):
        (export_dir / "icon512.png").write_bytes(b"\x89PNG")
        sample_project.game_resolution_width = 1280
        sample_project.game_resolution_height = 720
        sample_project.resources.append(Resource(name="icon", file="icon512.png"))
        sample_project.platform_specific_assets = {"desktop": {"icon-512": "icon"}}
        context = make_context(sample_project, ExportTarget.ELECTRON, export_dir)

        assert get_templater(ExportTarget.ELECTRON, file_system, str(runtime_root)).write_files(context)

        main_js = (export_dir / "main.js").read_text()
        assert "width: 1280," in main_js
        assert "height: 720," in main_js
        assert 'title: "My Game",' in main_js
        assert json.loads((export_dir / "package.json").read_text())["name"] == "my_32game"
        assert (export_dir / "buildResources" / "icon.png").read_bytes() == b"\x89PNG"

    def test_electron_without_icon(self, sample_project, runtime_root, export_dir, file_system):
        context = make_context(sample_project, ExportTarget.ELECTRON, export_dir)

        assert get_templater(ExportTarget.ELECTRON, file_system, str(runtime_root)).write_files(context)
        assert (export_dir / "buildResources").is_dir()
        assert not (export_dir / "buildResources" / "icon.png").exists()

    @pytest.mark.parametrize("orientation, expected", [("portrait", "PORTRAIT"), ("landscape", "LANDSCAPE")])
    def test_facebook_instant_games(self, sample_project, runtime_root, export_dir, file_system, orientation, expected):
        sample_project.orientation = orientation
        context = make_context(sample_project, ExportTarget.FACEBOOK_INSTANT_GAMES, export_dir)

        assert get_templater(ExportTarget.FACEBOOK_INSTANT_GAMES, file_system, str(runtime_root)).write_files(context)

        config = json.loads((export_dir / "fbapp-config.json").read_text())
        assert config["instant_games"]["orientation"] == expected

    @pytest.mark.parametrize("debug_mode, show_fps", [(True, "true"), (False, "false")])
    def test_cocos2d(self, sample_project, runtime_root, export_dir, file_system, debug_mode, show_fps):
        """Test the Cocos2d project.json listing the scripts under src/."""
        (export_dir / "src").mkdir()
        (export_dir / "src" / "gd.js").write_text("// gd.js\n")
        (export_dir / "src" / "data.js").write_text("gdjs.projectData = {};\n")
        context = make_context(
            sample_project,
            ExportTarget.COCOS2D,
            export_dir,
            includes=["gd.js", "missing.js", "data.js"],
            debug_mode=debug_mode,
        )

        assert Cocos2dTemplater(file_system, str(runtime_root)).write_files(context)

        project_json = (export_dir / "project.json").read_text()
        assert '"src/gd.js"\n, "src/data.js"\n' in project_json
        assert "missing.js" not in project_json
        assert f'"showFPS": {show_fps},' in project_json
        assert (export_dir / "main.js").exists()
        assert (export_dir / "cocos2d-js-v3.10.js").exists()
        assert "crossorigin" not in (export_dir / "index.html").read_text()

    def test_registry_covers_every_target(self, file_system, runtime_root):
        for target in ExportTarget:
            templater = get_templater(target, file_system, str(runtime_root))
            assert templater.target is target
