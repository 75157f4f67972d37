"""Import collection for generated Java sources.

This module collects fully qualified class names needed by an artifact,
either added explicitly or discovered from Java type expressions such as
``Map<String, List<Pet>>``, and emits them deduplicated and sorted.
"""

import re

JAVA_TYPE_IMPORTS = {
    'List': 'java.util.List',
    'Map': 'java.util.Map',
    'UUID': 'java.util.UUID',
    'BigDecimal': 'java.math.BigDecimal',
    'LocalDate': 'java.time.LocalDate',
    'OffsetDateTime': 'java.time.OffsetDateTime',
    'InputStream': 'java.io.InputStream',
}

_IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


class ImportCollector:
    """Collects imports for one generated Java file.

    Example:
        >>> collector = ImportCollector(model_package='model', models={'Pet'})
        >>> collector.add_type('Map<String, List<Pet>>')
        >>> collector.add_import('javax.ws.rs.GET')
        >>> collector.to_list()
        ['java.util.List', 'java.util.Map', 'javax.ws.rs.GET', 'model.Pet']
    """

    def __init__(
        self,
        model_package: str | None = None,
        models: set[str] | None = None,
        own_package: str | None = None,
    ):
        """Initialize an empty import collector.

        Args:
            model_package: Package of generated models.
            models: Class names of generated models.
            own_package: Package of the file being generated; classes from
                it are not imported.
        """
        self.model_package = model_package
        self.models = models or set()
        self.own_package = own_package
        self._imports: set[str] = set()

    def add_import(self, name: str) -> None:
        """Add a single fully qualified class name."""
        self._imports.add(name)

    def add_type(self, type_text: str | None) -> None:
        """Add the imports required by a Java type expression."""
        if not type_text:
            return
        for identifier in _IDENTIFIER.findall(type_text):
            if identifier in JAVA_TYPE_IMPORTS:
                self._imports.add(JAVA_TYPE_IMPORTS[identifier])
            elif identifier in self.models and self.model_package is not None:
                if self.model_package != self.own_package:
                    self._imports.add(f'{self.model_package}.{identifier}')

    def has_imports(self) -> bool:
        return bool(self._imports)

    def to_list(self) -> list[str]:
        """Return the collected imports sorted alphabetically."""
        return sorted(self._imports)
