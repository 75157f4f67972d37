"""Generation hooks called by the rendering pipeline.

The pipeline (:class:`~mprestgen.codegen.codegen.Codegen`) parses the API
document and renders templates; the decisions specific to MicroProfile REST
clients are delegated to a small set of hooks so that they can be tested
and replaced on their own.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from mprestgen.codegen.grouping import OperationGrouper
from mprestgen.codegen.naming import NameResolver
from mprestgen.codegen.postprocess import ArtifactPostProcessor

if TYPE_CHECKING:
    from upath import UPath

    from mprestgen.codegen.formatters import Formatter
    from mprestgen.codegen.grouping import GroupAssignment
    from mprestgen.codegen.policy import GenerationPolicy
    from mprestgen.codegen.postprocess import FormatResult
    from mprestgen.codegen.types import CodegenOperation


class GenerationHooks(Protocol):
    """The hooks a generation pass calls, in pipeline order."""

    def resolve_group(
        self,
        operation: CodegenOperation,
        resource_path: str,
        groups: GroupAssignment,
    ) -> CodegenOperation: ...

    def resolve_name(self, raw_path: str) -> str: ...

    def record_file(self, path: str | Path | UPath) -> None: ...

    def post_process(self) -> list[FormatResult]: ...


class MicroProfileHooks:
    """Hooks of the MicroProfile REST client generator.

    Attributes:
        policy: The resolved generation policy.
        names: Interface and bean-parameter naming.
        grouper: Assigns operations to interface groups.
        post_processor: Records written files and formats them afterwards.
    """

    def __init__(self, policy: GenerationPolicy, formatter: Formatter):
        self.policy = policy
        self.names = NameResolver(policy)
        self.grouper = OperationGrouper(policy, self.names)
        self.post_processor = ArtifactPostProcessor(formatter)

    def resolve_group(
        self,
        operation: CodegenOperation,
        resource_path: str,
        groups: GroupAssignment,
    ) -> CodegenOperation:
        """Group an operation and decide on its bean parameter."""
        assigned = self.grouper.assign(operation, resource_path, groups)
        marked = self.grouper.mark_bean_param(assigned)
        # The group holds the copy returned by assign; swap in the marked one.
        members = groups[assigned.group_name]
        members[-1] = marked
        return marked

    def resolve_name(self, raw_path: str) -> str:
        return self.names.api_name(raw_path)

    def record_file(self, path: str | Path | UPath) -> None:
        self.post_processor.record(path)

    def post_process(self) -> list[FormatResult]:
        return self.post_processor.run_sweep(self.policy)
