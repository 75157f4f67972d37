"""File writing utilities for generated Java sources.

This module writes rendered artifacts to the filesystem and reports each
destination path to a listener just before the file is (re)written, which
is how the formatting sweep learns about emitted files.
"""

from collections.abc import Callable
from pathlib import Path

from upath import UPath

from mprestgen.exceptions import OutputError


class SourceFileWriter:
    """Writes rendered source text to files.

    Example:
        >>> post = ArtifactPostProcessor(GoogleJavaFormatter())
        >>> writer = SourceFileWriter(on_write=post.record)
        >>> writer.write('out/api/PetsApi.java', source)
    """

    def __init__(self, on_write: Callable[[str], None] | None = None):
        """Initialize the writer.

        Args:
            on_write: Called with the destination path before every write.
        """
        self._on_write = on_write
        self.written: list[UPath] = []

    def write(self, path: UPath | Path | str, content: str) -> UPath:
        """Write text to a file, creating parent directories.

        Args:
            path: Destination path.
            content: Source text to write.

        Returns:
            The destination path.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = UPath(path)
        if self._on_write is not None:
            self._on_write(str(path))

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e) from e

        self.written.append(path)
        return path


def package_dir(output: UPath | Path | str, package: str) -> UPath:
    """Return the directory of a Java package below an output directory."""
    directory = UPath(output)
    for part in package.split('.'):
        if part:
            directory = directory / part
    return directory
