"""Test configuration for Bundlesmith."""

import json
import tempfile
from pathlib import Path

import pytest

from Bundlesmith.models.behavior import (
    BehaviorInstance,
    EventsBasedBehavior,
    EventsFunction,
    EventsFunctionsExtension,
    PropertyDescriptor,
)
from Bundlesmith.models.project import (
    GameObject,
    Layout,
    Project,
    Resource,
    ResourceKind,
)
from Bundlesmith.services.includes import (
    COMMON_INCLUDES,
    DEBUGGER_CLIENT_INCLUDES,
    EVENTS_TOOLS_INCLUDES,
    RENDERER_INCLUDES,
)

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <style>/* GDJS_CUSTOM_STYLE */</style>
<!-- GDJS_CODE_FILES -->
</head>
<body>
<!-- GDJS_CUSTOM_HTML -->
<script>
    var game = new gdjs.RuntimeGame(gdjs.projectData, {}/*GDJS_ADDITIONAL_SPEC*/);
</script>
</body>
</html>
"""

CORDOVA_CONFIG_TEMPLATE = """<?xml version='1.0' encoding='utf-8'?>
<widget id="GDJS_PACKAGENAME" version="GDJS_PROJECTVERSION">
    <name>GDJS_PROJECTNAME</name>
    <preference name="Orientation" value="GDJS_ORIENTATION" />
    <platform name="android">
<!-- GDJS_ICONS_ANDROID -->
    </platform>
    <platform name="ios">
<!-- GDJS_ICONS_IOS -->
    </platform>
    <!-- GDJS_ADMOB_PLUGIN_AND_APPLICATION_ID -->
</widget>
"""

PACKAGE_JSON_TEMPLATE = """{
  "name": "GDJS_GAME_MANGLED_NAME",
  "productName": "GDJS_GAME_NAME",
  "author": "GDJS_GAME_AUTHOR",
  "version": "GDJS_GAME_VERSION"
}
"""

ELECTRON_MAIN_TEMPLATE = """const win = new BrowserWindow({
  width: 800 /*GDJS_WINDOW_WIDTH*/,
  height: 600 /*GDJS_WINDOW_HEIGHT*/,
  title: "GDJS_GAME_NAME",
});
"""

FBAPP_CONFIG_TEMPLATE = """{
  "instant_games": {
    "orientation": "GDJS_ORIENTATION"
  }
}
"""

COCOS_PROJECT_TEMPLATE = """{
  "showFPS": /*GDJS_SHOW_FPS*/,
  "jsList": [
    // GDJS_INCLUDE_FILES
  ]
}
"""

TEMPLATES = {
    "index.html": INDEX_TEMPLATE,
    "Cordova/config.xml": CORDOVA_CONFIG_TEMPLATE,
    "Cordova/package.json": PACKAGE_JSON_TEMPLATE,
    "Electron/package.json": PACKAGE_JSON_TEMPLATE,
    "Electron/main.js": ELECTRON_MAIN_TEMPLATE,
    "FacebookInstantGames/fbapp-config.json": FBAPP_CONFIG_TEMPLATE,
    "Cocos2d/index.html": INDEX_TEMPLATE,
    "Cocos2d/main.js": "cc.game.run();\n",
    "Cocos2d/cocos2d-js-v3.10.js": "var cc = {};\n",
    "Cocos2d/project.json": COCOS_PROJECT_TEMPLATE,
}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def runtime_root(temp_dir):
    """Create a runtime directory with every baseline include and template.

    Args:
        temp_dir: Pytest fixture providing a temporary directory path.

    Returns:
        Path: The runtime root.
    """
    root = temp_dir / "Runtime"
    includes = (
        list(COMMON_INCLUDES)
        + list(EVENTS_TOOLS_INCLUDES)
        + list(DEBUGGER_CLIENT_INCLUDES)
        + [include for backend_includes in RENDERER_INCLUDES.values() for include in backend_includes]
    )
    for include in includes:
        path = root / include
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {include}\n")

    for name, content in TEMPLATES.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    return root


@pytest.fixture
def code_output_dir(temp_dir):
    """Scratch directory receiving generated code."""
    return temp_dir / "code"


@pytest.fixture
def file_system():
    """Create the local file system used by the services.

    Returns:
        LocalFileSystem: A file system backed by the disk.
    """
    from Bundlesmith.storage import LocalFileSystem
    return LocalFileSystem()


@pytest.fixture
def mover_behavior():
    """An events-based behavior with one property of each type.

    Returns:
        EventsBasedBehavior: The "Mover" behavior.
    """
    return EventsBasedBehavior(
        name="Mover",
        full_name="Moves objects",
        property_descriptors=[
            PropertyDescriptor(name="speed", type="Number", value="100"),
            PropertyDescriptor(name="label", type="String", value="Hello"),
            PropertyDescriptor(name="direction", type="Choice", value="left"),
            PropertyDescriptor(name="active", type="Boolean", value="true"),
            PropertyDescriptor(name="internalCounter", type="Number", value="5", hidden=True),
        ],
        events_functions=[
            EventsFunction(
                name="doStepPreEvents",
                events_code="this.owner.addForce(this._getspeed(), 0, 0);",
            ),
            EventsFunction(
                name="onOwnerRemovedFromScene",
                events_code="this._setactive(false);",
            ),
        ],
    )


@pytest.fixture
def sample_project(temp_dir, mover_behavior):
    """Create a project on disk using the Mover behavior in its only layout.

    Args:
        temp_dir: Pytest fixture providing a temporary directory path.
        mover_behavior: Pytest fixture providing the behavior.

    Returns:
        Project: A project whose project file and resources exist on disk.
    """
    project_dir = temp_dir / "project"
    (project_dir / "assets").mkdir(parents=True)
    (project_dir / "assets" / "player.png").write_bytes(b"\x89PNG")
    (project_dir / "scripts").mkdir()
    (project_dir / "scripts" / "helpers.js").write_text("var helpers = {};\n")

    project = Project(
        name="My Game",
        author="Someone",
        version="1.2.3",
        package_name="com.example.mygame",
        project_file=str(project_dir / "game.json"),
        first_layout="Main",
        layouts=[
            Layout(
                name="Main",
                events_code="runtimeScene.setBackgroundColor(0, 0, 0);",
                objects=[
                    GameObject(
                        name="Player",
                        behaviors=[BehaviorInstance(name="Mover", type="Movement::Mover")],
                    )
                ],
            )
        ],
        resources=[Resource(name="player", kind=ResourceKind.IMAGE, file="assets/player.png")],
        extensions=[
            EventsFunctionsExtension(name="Movement", events_based_behaviors=[mover_behavior])
        ],
        editor_settings={"grid": True},
    )
    (project_dir / "game.json").write_text(project.model_dump_json(by_alias=True))
    return project


@pytest.fixture
def method_mangled_names():
    """Method name mapping of the Mover behavior.

    Returns:
        dict: 'Extension::Behavior' -> declared name -> implementation name.
    """
    return {
        "Movement::Mover": {
            "doStepPreEvents": "doStepPreEvents",
            "onOwnerRemovedFromScene": "onOwnerRemovedFromScene",
        }
    }


@pytest.fixture
def method_names_file(temp_dir, method_mangled_names):
    """Write the method name mapping to a JSON file."""
    path = temp_dir / "method-names.json"
    path.write_text(json.dumps(method_mangled_names))
    return path
