"""google-java-format formatter for generated Java sources."""

import logging
import subprocess

from mprestgen.codegen.formatters.base import Formatter
from mprestgen.exceptions import FormattingError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = 'google-java-format'


class GoogleJavaFormatter(Formatter):
    """Formatter running the ``google-java-format`` command line tool.

    Source is passed on stdin (``google-java-format -``); the tool formats
    it, removes unused imports and sorts the remaining ones.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE, timeout: float = 60):
        self.executable = executable
        self.timeout = timeout
        self._available = None

    def is_available(self) -> bool:
        """Check if the executable can be run."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [self.executable, '--version'],
                    capture_output=True,
                    text=True,
                    timeout=10,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, OSError):
                self._available = False
            if not self._available:
                logger.debug(f'{self.executable} is not available')
        return self._available

    def format(self, code: str) -> str:
        """Format Java source code.

        Raises:
            FormattingError: If the tool exits with an error, times out or
                cannot be started.
        """
        try:
            result = subprocess.run(
                [self.executable, '-'],
                input=code,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise FormattingError(f'{self.executable} timed out') from e
        except (subprocess.SubprocessError, OSError) as e:
            raise FormattingError(f'{self.executable} could not be run: {e}') from e

        if result.returncode != 0:
            reason = result.stderr.strip() or f'exit code {result.returncode}'
            raise FormattingError(reason)
        return result.stdout
