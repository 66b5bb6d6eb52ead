"""
Events code generator interface.

The events compiler turns the visual events of a layout, or of one behavior
method, into runtime code. It lives outside the exporter: the exporter only
concatenates the returned code and forwards the returned include files.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...models.behavior import EventsFunction
from ...models.codegen import GeneratedCode
from ...models.project import Layout, Project


class EventsCodeGenerator(ABC):
    """Abstract events compiler."""

    @abstractmethod
    def generate_layout_code(
        self,
        project: Project,
        layout: Layout,
        compilation_for_runtime: bool,
    ) -> GeneratedCode:
        """Generate the complete code of a layout.

        Args:
            project: Project owning the layout.
            layout: Layout to compile.
            compilation_for_runtime: False when compiling for a preview.

        Returns:
            The layout code, its extra include files and any diagnostics.
        """
        ...

    @abstractmethod
    def generate_behavior_method_code(
        self,
        method: EventsFunction,
        method_namespace: str,
        fully_qualified_name: str,
        compilation_for_runtime: bool,
    ) -> GeneratedCode:
        """Generate the code of one behavior method.

        Args:
            method: The events function to compile.
            method_namespace: Namespace for the method's own generated helpers.
            fully_qualified_name: Expression the method must be assigned to.
            compilation_for_runtime: False when compiling for a preview.

        Returns:
            The method code and its extra include files.
        """
        ...
