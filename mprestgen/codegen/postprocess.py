"""Post-processing sweep over emitted source files.

Every artifact path is recorded just before it is written. After all
artifacts are rendered, :meth:`ArtifactPostProcessor.run_sweep` formats each
recorded file in place. Formatting is cosmetic: a file that fails to
format keeps its original content, the failure is logged and reported in
the returned results, and the sweep continues with the next file.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from upath import UPath

if TYPE_CHECKING:
    from mprestgen.codegen.formatters import Formatter
    from mprestgen.codegen.policy import GenerationPolicy

logger = logging.getLogger(__name__)

FormatStatus = Literal['formatted', 'failed', 'skipped']


@dataclasses.dataclass
class FormatResult:
    """Outcome of formatting one recorded file.

    Attributes:
        path: The recorded path.
        status: ``formatted``, ``failed`` or ``skipped``.
        error: Why the file was not formatted, if it was not.
    """

    path: str
    status: FormatStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == 'formatted'


class ArtifactPostProcessor:
    """Records emitted files and reformats them in one sweep.

    Example:
        >>> post = ArtifactPostProcessor(GoogleJavaFormatter())
        >>> post.record('out/api/PetsApi.java')
        >>> results = post.run_sweep(policy)
    """

    def __init__(self, formatter: Formatter):
        self.formatter = formatter
        self._files: list[str] = []

    @property
    def files(self) -> list[str]:
        """The recorded paths, in emission order."""
        return list(self._files)

    def record(self, path: str | Path | UPath) -> None:
        """Record a file that is about to be written.

        The same path may be recorded more than once; it is then formatted
        more than once, which is harmless because formatting is idempotent.
        """
        self._files.append(str(path))

    def run_sweep(self, policy: GenerationPolicy) -> list[FormatResult]:
        """Format every recorded file in place.

        Returns:
            One result per recorded path, in emission order. Empty when
            formatting is disabled by the policy.
        """
        if not policy.formatter:
            return []
        if not self._files:
            return []

        if not self.formatter.is_available():
            reason = f'{type(self.formatter).__name__} is not available'
            logger.warning(f'Skip formatting of {len(self._files)} files: {reason}')
            return [FormatResult(path, 'skipped', reason) for path in self._files]

        logger.info('Formatting generated source code')
        return [self._format_file(path) for path in self._files]

    def _format_file(self, path: str) -> FormatResult:
        try:
            logger.info(f'Formatting source code: {path}')
            file_path = UPath(path)
            source = file_path.read_text(encoding='utf-8')
            formatted = self.formatter.format(source)
            file_path.write_text(formatted, encoding='utf-8')
        except Exception as e:
            logger.error(f'Skip formatting of {path}: {e}')
            return FormatResult(path, 'failed', str(e))
        return FormatResult(path, 'formatted')
