"""
Behavior Code Generation Service.

Generates the runtime JavaScript definition of an events-based behavior: a
constructor extending gdjs.RuntimeBehavior, a hot-reload method, accessors for
each property and the behavior methods compiled from events.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from ...core.logging import get_logger
from ...core.template import replace_tokens, to_js_string
from ...models.behavior import EventsBasedBehavior, PropertyDescriptor, PropertyType
from ...models.codegen import CodeDiagnostic, DiagnosticKind, GeneratedCode, PropertyLiteral

if TYPE_CHECKING:
    from ..events.interface import EventsCodeGenerator

logger = get_logger(__name__)

# Implementation name used when the caller did not provide one for a method.
UNKNOWN_FUNCTION_NAME = "UNKNOWN_FUNCTION_fix_behaviorMethodMangledNames_please"

DESTROY_HOOK = "onDestroy"
DEPRECATED_DESTROY_HOOK = "onOwnerRemovedFromScene"

UNRECOGNIZED_TYPE_CODE = "0 /* Error: property was of an unrecognized type */"

BEHAVIOR_TEMPLATE = """
CODE_NAMESPACE = CODE_NAMESPACE || {};

/**
 * Behavior generated from BEHAVIOR_FULL_NAME
 * @class RUNTIME_BEHAVIOR_CLASSNAME
 * @extends gdjs.RuntimeBehavior
 * @constructor
 */
CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME = function(runtimeScene, behaviorData, owner)
{
    gdjs.RuntimeBehavior.call(this, runtimeScene, behaviorData, owner);
    this._runtimeScene = runtimeScene;

    this._behaviorData = {};
INITIALIZE_PROPERTIES_CODE
};

CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME.prototype = Object.create( gdjs.RuntimeBehavior.prototype );
gdjs.registerBehavior(BEHAVIOR_TYPE, CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME);

// Hot-reload:
CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME.prototype.updateFromBehaviorData = function(oldBehaviorData, newBehaviorData) {
UPDATE_FROM_BEHAVIOR_DATA_CODE

    return true;
}

// Properties:
PROPERTIES_CODE

// Methods:
METHODS_CODE
"""

INITIALIZE_FROM_DATA_TEMPLATE = """
    this._behaviorData.PROPERTY_NAME = behaviorData.PROPERTY_NAME !== undefined ? behaviorData.PROPERTY_NAME : DEFAULT_VALUE;"""

INITIALIZE_FROM_DEFAULT_TEMPLATE = """
    this._behaviorData.PROPERTY_NAME = DEFAULT_VALUE;"""

UPDATE_FROM_DATA_TEMPLATE = """
    if (oldBehaviorData.PROPERTY_NAME !== newBehaviorData.PROPERTY_NAME)
        this._behaviorData.PROPERTY_NAME = newBehaviorData.PROPERTY_NAME;"""

PROPERTY_ACCESSORS_TEMPLATE = """
CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME.prototype.GETTER_NAME = function() {
    return this._behaviorData.PROPERTY_NAME !== undefined ? this._behaviorData.PROPERTY_NAME : DEFAULT_VALUE;
};
CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME.prototype.SETTER_NAME = function(newValue) {
    this._behaviorData.PROPERTY_NAME = newValue;
};"""

# Compatibility with projects made before the destruction hook was renamed
ON_DESTROY_COMPATIBILITY_TEMPLATE = """
CODE_NAMESPACE.RUNTIME_BEHAVIOR_CLASSNAME.prototype.HOOK_NAME = function() {
  // Redirect call to DEPRECATED_HOOK_NAME (the old name of HOOK_NAME)
  if (this.DEPRECATED_HOOK_NAME) this.DEPRECATED_HOOK_NAME();
};"""


def generate_property_value_code(
    prop: PropertyDescriptor, behavior_type: str = ""
) -> PropertyLiteral:
    """Encode the default value of a property as a JavaScript expression.

    Args:
        prop: The property descriptor.
        behavior_type: 'Extension::Behavior' owning the property, for diagnostics.

    Returns:
        The literal expression. Unrecognized types give a ``0`` sentinel and a
        diagnostic instead of raising.
    """
    prop_type = prop.known_type
    if prop_type in (PropertyType.STRING, PropertyType.CHOICE):
        return PropertyLiteral(code=to_js_string(prop.value))
    if prop_type is PropertyType.NUMBER:
        # Corrupted defaults coerce to NaN at runtime, hence the fallback.
        return PropertyLiteral(code=f"Number({to_js_string(prop.value)}) || 0")
    if prop_type is PropertyType.BOOLEAN:
        # Exact match only, "1" or "TRUE" are false.
        return PropertyLiteral(code="true" if prop.value == "true" else "false")

    return PropertyLiteral(
        code=UNRECOGNIZED_TYPE_CODE,
        diagnostic=CodeDiagnostic(
            kind=DiagnosticKind.UNRECOGNIZED_PROPERTY_TYPE,
            behavior=behavior_type,
            subject=prop.name,
            message=f"Property '{prop.name}' has unrecognized type '{prop.type}', defaulting to 0",
        ),
    )


def get_property_getter_name(property_name: str) -> str:
    return "_get" + property_name


def get_property_setter_name(property_name: str) -> str:
    return "_set" + property_name


class BehaviorCodeGenerator:
    """Generator for the runtime code of events-based behaviors.

    Method bodies are delegated to the events code generator; method
    implementation names always come from the caller.
    """

    def __init__(self, events_generator: EventsCodeGenerator) -> None:
        """Initialize the generator.

        Args:
            events_generator: Compiler used for the behavior methods.
        """
        self.events_generator = events_generator

    def generate_runtime_behavior_complete_code(
        self,
        extension_name: str,
        behavior: EventsBasedBehavior,
        code_namespace: str,
        method_mangled_names: Mapping[str, str],
        compilation_for_runtime: bool = False,
    ) -> GeneratedCode:
        """Generate the complete definition of a behavior.

        Args:
            extension_name: Extension declaring the behavior.
            behavior: The behavior to generate.
            code_namespace: JavaScript namespace receiving the definition.
            method_mangled_names: Declared method name -> implementation name.
            compilation_for_runtime: False when compiling for a preview.

        Returns:
            The behavior code with the includes required by its methods and the
            diagnostics for degraded properties or methods.
        """
        behavior_type = f"{extension_name}::{behavior.name}"
        result = GeneratedCode()

        literals: dict[str, str] = {}
        for prop in behavior.property_descriptors:
            literal = generate_property_value_code(prop, behavior_type)
            if literal.diagnostic:
                result.diagnostics.append(literal.diagnostic)
            literals[prop.name] = literal.code

        initialize_code = "".join(
            self._generate_initialize_property_code(prop, literals[prop.name])
            for prop in behavior.property_descriptors
        )
        update_code = "".join(
            replace_tokens(UPDATE_FROM_DATA_TEMPLATE, [("PROPERTY_NAME", prop.name)])
            for prop in behavior.property_descriptors
        )
        properties_code = "".join(
            self._generate_property_accessors_code(
                behavior, code_namespace, prop, literals[prop.name]
            )
            for prop in behavior.property_descriptors
        )
        methods_code = self._generate_methods_code(
            behavior_type,
            behavior,
            code_namespace,
            method_mangled_names,
            compilation_for_runtime,
            result,
        )

        result.code = replace_tokens(
            BEHAVIOR_TEMPLATE,
            [
                ("CODE_NAMESPACE", code_namespace),
                ("RUNTIME_BEHAVIOR_CLASSNAME", behavior.name),
                ("BEHAVIOR_TYPE", to_js_string(behavior_type)),
                ("BEHAVIOR_FULL_NAME", _comment_safe(behavior.full_name or behavior.name)),
                ("INITIALIZE_PROPERTIES_CODE", initialize_code),
                ("UPDATE_FROM_BEHAVIOR_DATA_CODE", update_code),
                ("PROPERTIES_CODE", properties_code),
                ("METHODS_CODE", methods_code),
            ],
        )

        if result.diagnostics:
            logger.warning(
                "Behavior generated with degraded code",
                behavior=behavior_type,
                diagnostics=len(result.diagnostics),
            )
        return result

    def _generate_initialize_property_code(self, prop: PropertyDescriptor, default_value: str) -> str:
        # Hidden properties are internal: stored instance data is never trusted for them.
        template = INITIALIZE_FROM_DEFAULT_TEMPLATE if prop.hidden else INITIALIZE_FROM_DATA_TEMPLATE
        return replace_tokens(
            template,
            [("PROPERTY_NAME", prop.name), ("DEFAULT_VALUE", default_value)],
        )

    def _generate_property_accessors_code(
        self,
        behavior: EventsBasedBehavior,
        code_namespace: str,
        prop: PropertyDescriptor,
        default_value: str,
    ) -> str:
        return replace_tokens(
            PROPERTY_ACCESSORS_TEMPLATE,
            [
                ("CODE_NAMESPACE", code_namespace),
                ("RUNTIME_BEHAVIOR_CLASSNAME", behavior.name),
                ("GETTER_NAME", get_property_getter_name(prop.name)),
                ("SETTER_NAME", get_property_setter_name(prop.name)),
                ("PROPERTY_NAME", prop.name),
                ("DEFAULT_VALUE", default_value),
            ],
        )

    def _generate_methods_code(
        self,
        behavior_type: str,
        behavior: EventsBasedBehavior,
        code_namespace: str,
        method_mangled_names: Mapping[str, str],
        compilation_for_runtime: bool,
        result: GeneratedCode,
    ) -> str:
        methods_code = ""
        prototype = f"{code_namespace}.{behavior.name}.prototype"

        for method in behavior.events_functions:
            function_name = method_mangled_names.get(method.name)
            if function_name is None:
                function_name = UNKNOWN_FUNCTION_NAME
                result.diagnostics.append(
                    CodeDiagnostic(
                        kind=DiagnosticKind.MISSING_METHOD_MAPPING,
                        behavior=behavior_type,
                        subject=method.name,
                        message=(
                            f"No implementation name was provided for method '{method.name}', "
                            f"it was generated as {UNKNOWN_FUNCTION_NAME}"
                        ),
                    )
                )

            method_code = self.events_generator.generate_behavior_method_code(
                method,
                method_namespace=f"{prototype}.{function_name}Context",
                fully_qualified_name=f"{prototype}.{function_name}",
                compilation_for_runtime=compilation_for_runtime,
            )
            methods_code += result.absorb(method_code)

            if function_name == DEPRECATED_DESTROY_HOOK:
                methods_code += self.generate_on_destroy_compatibility_code(behavior, code_namespace)

        return methods_code

    def generate_on_destroy_compatibility_code(
        self, behavior: EventsBasedBehavior, code_namespace: str
    ) -> str:
        """Generate an onDestroy method forwarding to onOwnerRemovedFromScene.

        Behaviors authored before the destruction hook was renamed still define
        onOwnerRemovedFromScene, which the runtime no longer calls.
        """
        return replace_tokens(
            ON_DESTROY_COMPATIBILITY_TEMPLATE,
            [
                ("CODE_NAMESPACE", code_namespace),
                ("RUNTIME_BEHAVIOR_CLASSNAME", behavior.name),
                ("DEPRECATED_HOOK_NAME", DEPRECATED_DESTROY_HOOK),
                ("HOOK_NAME", DESTROY_HOOK),
            ],
        )


def _comment_safe(text: str) -> str:
    return text.replace("*/", "* /").replace("\n", " ")
