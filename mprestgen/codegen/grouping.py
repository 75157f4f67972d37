"""Assignment of operations to resource groups.

Each group becomes one generated client interface. The group of an
operation is the first segment of its resource path (after removal of the
configured path prefix); the same truncation also rewrites the operation's
path so that it is relative to the group.

Example:
    >>> from mprestgen.codegen.policy import resolve_policy
    >>> grouper = OperationGrouper(resolve_policy({}))
    >>> groups = {}
    >>> op = grouper.assign(operation, '/pets/{id}', groups)
    >>> op.group_name, op.path, op.is_sub_resource
    ('pets', '/{id}', True)
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from mprestgen.codegen.naming import NameResolver, first_segment

if TYPE_CHECKING:
    from mprestgen.codegen.policy import GenerationPolicy
    from mprestgen.codegen.types import CodegenOperation

logger = logging.getLogger(__name__)

DEFAULT_GROUP_KEY = 'default'

GroupAssignment = dict[str, list['CodegenOperation']]


class OperationGrouper:
    """Assigns operations to groups and rewrites their residual paths.

    The grouper owns no state besides the policy; the group map is passed
    in by the generation pass that owns it.
    """

    def __init__(self, policy: GenerationPolicy, names: NameResolver | None = None):
        self.policy = policy
        self.names = names or NameResolver(policy)

    def assign(
        self,
        operation: CodegenOperation,
        resource_path: str,
        groups: GroupAssignment,
    ) -> CodegenOperation:
        """Assign an operation to its group.

        Args:
            operation: The operation produced by the OpenAPI processor. It is
                not modified.
            resource_path: The resource path the operation was declared under.
            groups: The group map of the current pass. The rewritten operation
                is appended to the sequence of its group, which is created on
                first use.

        Returns:
            A copy of the operation with ``group_name``, ``path`` and
            ``is_sub_resource`` set.
        """
        prefix = self.policy.path_prefix
        base_path = first_segment(resource_path or '', prefix)
        path = operation.path
        is_sub_resource = operation.is_sub_resource

        if base_path == '':
            base_path = DEFAULT_GROUP_KEY
        else:
            if path.startswith('/' + base_path):
                path = path[len('/' + base_path) :]
            is_sub_resource = path != ''

        if prefix:
            group_name = prefix + base_path
            if path.startswith('/'):
                path = path[1:]
            # Literal removal of the first occurrence, wherever it is.
            path = path.replace(group_name, '', 1)
        else:
            group_name = base_path

        assigned = dataclasses.replace(
            operation,
            group_name=group_name,
            path=path,
            is_sub_resource=is_sub_resource,
        )
        groups.setdefault(group_name, []).append(assigned)
        logger.debug(
            f'Assigned {operation.http_method} {operation.declared_path} '
            f'to group {group_name!r} (path {path!r})'
        )
        return assigned

    def mark_bean_param(self, operation: CodegenOperation) -> CodegenOperation:
        """Decide whether an operation bundles its parameters.

        The bean-parameter name is always computed; the operation is marked
        to use it when the number of eligible parameters reaches the
        configured threshold.

        Returns:
            A copy of the operation with ``bean_param_name`` and
            ``has_bean_param`` set.
        """
        eligible = len(operation.bean_params)
        return dataclasses.replace(
            operation,
            bean_param_name=self.names.bean_param_name(operation.operation_id),
            has_bean_param=eligible >= self.policy.bean_param_count,
        )
