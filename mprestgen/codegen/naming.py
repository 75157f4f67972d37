"""Name resolution for generated interfaces and bundled parameters.

The functions here are pure: they map raw API path or operation-id
strings to Java symbol names using the naming settings of a
:class:`~mprestgen.codegen.policy.GenerationPolicy`, and never fail.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mprestgen.codegen.utils import camelize, sanitize_name

if TYPE_CHECKING:
    from mprestgen.codegen.policy import GenerationPolicy

DEFAULT_GROUP_NAME = 'Default'


def first_segment(path: str, prefix: str | None) -> str:
    """Return the first path segment after prefix removal.

    The first occurrence of ``prefix`` is removed (a literal substring
    removal, not an anchored one), then one leading ``/`` is dropped and the
    remainder is truncated at the next ``/``. A path without further
    separators is returned whole.
    """
    if prefix:
        path = path.replace(prefix, '', 1)
    if path.startswith('/'):
        path = path[1:]
    pos = path.find('/')
    if pos > 0:
        path = path[:pos]
    return path


class NameResolver:
    """Computes interface and bean-parameter names for a policy.

    Example:
        >>> from mprestgen.codegen.policy import resolve_policy
        >>> names = NameResolver(resolve_policy({}))
        >>> names.api_name('/pets/{id}')
        'PetsApi'
        >>> names.bean_param_name('listPets')
        'ListPetsBeanParam'
    """

    def __init__(self, policy: GenerationPolicy):
        self.policy = policy

    def api_name(self, raw_path: str) -> str:
        """Return the interface name for a raw path or group key.

        A fixed ``apiName`` wins verbatim. Otherwise the first segment is
        sanitized, camelized and suffixed; an empty segment (or one with no
        identifier characters) maps to ``Default`` plus the suffix.
        """
        if self.policy.api_name is not None:
            return self.policy.api_name

        suffix = self.policy.api_suffix
        candidate = first_segment(raw_path or '', self.policy.path_prefix)
        if not candidate:
            return DEFAULT_GROUP_NAME + suffix

        computed = camelize(sanitize_name(candidate))
        if not computed:
            return DEFAULT_GROUP_NAME + suffix
        if computed[0].isdigit():
            computed = '_' + computed
        return computed + suffix

    def bean_param_name(self, operation_id: str) -> str:
        """Return the bundled-parameter class name for an operation id.

        Characters that cannot appear in a Java identifier separate words,
        so ``pets:search`` becomes ``PetsSearch`` plus the suffix.
        """
        words = re.sub(r'[^\w\s.-]+', '_', operation_id or '')
        computed = camelize(sanitize_name(words))
        if computed[:1].isdigit():
            computed = '_' + computed
        return computed + self.policy.bean_param_suffix
