"""Registry of convertible types keyed by their JSON type name."""

import importlib
import inspect
import pkgutil
from typing import Any

from questvault.json_utils.convertible import JsonConvertible
from questvault.json_utils.correcter import JsonDataCorrecter
from questvault.json_utils.parsing import ParseOutcome


class ConvertibleRegistry:
    """Discovers every concrete convertible type in a models package."""

    def __init__(self, package: str = "questvault.models"):
        """Initialize the registry.

        Args:
            package: Dotted name of the package whose modules are scanned
        """
        self.package = package
        self._types: dict[str, type[JsonConvertible]] = {}
        self._load_types()

    def _load_types(self) -> None:
        """Dynamically import every module of the package and collect its types."""
        package_module = importlib.import_module(self.package)

        for module_info in sorted(pkgutil.iter_modules(package_module.__path__), key=lambda m: m.name):
            # Safe: module names come from the installed package, not user input
            module = importlib.import_module(f"{self.package}.{module_info.name}")  # nosemgrep

            for _, member in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(member, JsonConvertible)
                    and member is not JsonConvertible
                    and not inspect.isabstract(member)
                ):
                    self._types[member.json_type_name] = member

    def get(self, name: str) -> type[JsonConvertible]:
        """Get a convertible type by name.

        Raises:
            KeyError: If no type is registered under that name
        """
        if name not in self._types:
            raise KeyError(f"Unknown convertible type: {name}")
        return self._types[name]

    def names(self) -> list[str]:
        """Get the sorted names of all registered types."""
        return sorted(self._types)

    def from_json(
        self,
        name: str,
        document: Any,
        file_version: str | None,
        correcter: JsonDataCorrecter | None = None,
    ) -> ParseOutcome:
        """Parse a document as the type registered under ``name``."""
        return self.get(name).from_json(document, file_version, correcter=correcter)
