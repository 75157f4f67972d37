"""Base class for source formatters."""

from abc import ABC, abstractmethod


class Formatter(ABC):
    """Abstract base class for source formatters.

    Implementations must be idempotent: formatting already formatted source
    returns it unchanged.
    """

    @abstractmethod
    def format(self, code: str) -> str:
        """Format the given source code.

        Args:
            code: The source code to format.

        Returns:
            The formatted source code.

        Raises:
            FormattingError: If the source could not be formatted.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the formatter can be used on this machine."""
