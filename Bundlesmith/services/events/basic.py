"""
Basic events code generator.

Default events compiler used when no real one is plugged in: the events of
layouts and methods are already compiled to text in the project, this
generator only wraps them into the runtime's code layout and generates the
definitions of the behaviors each layout uses.
"""

from __future__ import annotations

from collections.abc import Mapping

from ...core.logging import get_logger
from ...core.template import mangle_name, replace_tokens, to_js_string
from ...models.behavior import EventsFunction
from ...models.codegen import GeneratedCode
from ...models.project import Layout, Project
from ..behavior_codegen.service import BehaviorCodeGenerator
from .interface import EventsCodeGenerator

logger = get_logger(__name__)

LAYOUT_TEMPLATE = """gdjs.LAYOUT_CODE_NAMESPACE = {};
BEHAVIORS_CODE
gdjs.LAYOUT_CODE_NAMESPACE.func = function(runtimeScene) {
runtimeScene.getOnceTriggers().startNewFrame();
EVENTS_CODE
return;
}

gdjs.LAYOUT_CODE_NAMESPACE.func.__layoutName = LAYOUT_NAME;
"""

METHOD_TEMPLATE = """
METHOD_NAMESPACE = {};
FULLY_QUALIFIED_NAME = function(PARAMETERS) {
var runtimeScene = this._runtimeScene;
var eventsFunctionContext = { behavior: this, owner: this.owner };
EVENTS_CODE
return;
}
"""


class BasicEventsCodeGenerator(EventsCodeGenerator):
    """Events compiler wrapping pre-compiled event text."""

    def __init__(
        self,
        method_mangled_names: Mapping[str, Mapping[str, str]] | None = None,
        namespace_prefix: str = "gdjs.evtsExt",
    ) -> None:
        """Initialize the generator.

        Args:
            method_mangled_names: 'Extension::Behavior' -> declared method name
                -> implementation name, provided by the caller.
            namespace_prefix: Prefix of the namespaces receiving behavior code.
        """
        self.method_mangled_names = method_mangled_names or {}
        self.namespace_prefix = namespace_prefix

    def get_behavior_code_namespace(self, extension_name: str, behavior_name: str) -> str:
        """Get the namespace receiving a behavior definition."""
        return f"{self.namespace_prefix}__{mangle_name(extension_name)}__{mangle_name(behavior_name)}"

    def generate_layout_code(
        self,
        project: Project,
        layout: Layout,
        compilation_for_runtime: bool,
    ) -> GeneratedCode:
        result = GeneratedCode()
        behavior_generator = BehaviorCodeGenerator(self)

        behaviors_code = ""
        for behavior_type in layout.behavior_types():
            behavior = project.get_events_based_behavior(behavior_type)
            if behavior is None:
                # Built-in behaviors are part of the runtime includes
                continue

            extension_name = behavior_type.split("::", 1)[0]
            behavior_code = behavior_generator.generate_runtime_behavior_complete_code(
                extension_name,
                behavior,
                self.get_behavior_code_namespace(extension_name, behavior.name),
                self.method_mangled_names.get(behavior_type, {}),
                compilation_for_runtime,
            )
            behaviors_code += result.absorb(behavior_code)

        for include in layout.include_files:
            if include not in result.include_files:
                result.include_files.append(include)

        result.code = replace_tokens(
            LAYOUT_TEMPLATE,
            [
                ("LAYOUT_CODE_NAMESPACE", mangle_name(layout.name) + "Code"),
                ("LAYOUT_NAME", to_js_string(layout.name)),
                ("BEHAVIORS_CODE", behaviors_code),
                ("EVENTS_CODE", layout.events_code),
            ],
        )

        logger.debug(
            "Layout code generated",
            layout=layout.name,
            behaviors=len(layout.behavior_types()),
            includes=len(result.include_files),
        )
        return result

    def generate_behavior_method_code(
        self,
        method: EventsFunction,
        method_namespace: str,
        fully_qualified_name: str,
        compilation_for_runtime: bool,
    ) -> GeneratedCode:
        code = replace_tokens(
            METHOD_TEMPLATE,
            [
                ("METHOD_NAMESPACE", method_namespace),
                ("FULLY_QUALIFIED_NAME", fully_qualified_name),
                ("PARAMETERS", ", ".join(method.parameters)),
                ("EVENTS_CODE", method.events_code),
            ],
        )
        return GeneratedCode(code=code, include_files=list(method.include_files))
