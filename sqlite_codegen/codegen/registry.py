"""
Language registry for the code generators.

Maps language names and their aliases (``py``, ``ts``, ``bun``) to
generator classes, and builds configured generator instances.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator

ConfigSource = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass(frozen=True)
class LanguageEntry:
    """One registered target language."""

    name: str
    generator_class: Type[CodeGenerator]
    aliases: Tuple[str, ...] = ()
    description: str = ""


class GeneratorRegistry:
    """Registry of target languages keyed by lowercased name."""

    def __init__(self):
        self._entries: Dict[str, LanguageEntry] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Iterable[str] = (),
        description: str = "",
    ):
        """
        Register a generator under ``language`` and its aliases.

        Re-registering a language replaces its entry and aliases.

        Raises:
            RegistryError: If the class is not a CodeGenerator, or an alias
                is already taken by another language.
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError(
                f"{generator_class!r} is not a CodeGenerator subclass"
            )

        name = language.lower()
        alias_keys = tuple(sorted({a.lower() for a in aliases} - {name}))

        for alias in alias_keys:
            owner = alias if alias in self._entries else self._aliases.get(alias)
            if owner is not None and owner != name:
                raise RegistryError(f"Alias '{alias}' is already used by '{owner}'")

        self.unregister(name)
        self._entries[name] = LanguageEntry(name, generator_class, alias_keys, description)
        for alias in alias_keys:
            self._aliases[alias] = name

    def unregister(self, language: str):
        """Remove a language and every alias pointing at it."""
        name = language.lower()
        self._entries.pop(name, None)
        for alias in [a for a, target in self._aliases.items() if target == name]:
            del self._aliases[alias]

    def resolve(self, language: str) -> str:
        """
        Primary name for a language name or alias.

        Raises:
            RegistryError: If nothing is registered under ``language``.
        """
        key = language.lower()
        if key in self._entries:
            return key
        if key in self._aliases:
            return self._aliases[key]
        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def entry(self, language: str) -> LanguageEntry:
        return self._entries[self.resolve(language)]

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self.entry(language).generator_class

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Build a generator for ``language``.

        ``config`` may be a ready GeneratorConfig, a dict of overrides or a
        path to a JSON file; dicts and files are merged over the language's
        defaults.
        """
        entry = self.entry(language)

        if config is None or isinstance(config, GeneratorConfig):
            final_config = config or load_config(entry.name)
        elif isinstance(config, dict):
            final_config = load_config(entry.name, custom_config=config)
        elif isinstance(config, (str, Path)):
            final_config = load_config(entry.name, config_file=config)
        else:
            raise RegistryError(f"Invalid config type: {type(config).__name__}")

        try:
            return entry.generator_class(final_config)
        except (TypeError, ValueError) as e:
            raise RegistryError(f"Failed to create {entry.name} generator: {e}") from e

    def list_languages(self) -> List[str]:
        return sorted(self._entries)

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._entries or key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Describe a language: extension, manifest file, aliases and class."""
        entry = self.entry(language)
        generator = entry.generator_class(load_config(entry.name))

        return {
            "name": entry.name,
            "description": entry.description,
            "class": entry.generator_class.__name__,
            "module": entry.generator_class.__module__,
            "file_extension": generator.file_extension,
            "manifest": generator.manifest_file_name,
            "aliases": list(entry.aliases),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """The process-wide registry, with the built-in languages registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_builtin_generators(_global_registry)
    return _global_registry


def _register_builtin_generators(registry: GeneratorRegistry):
    from .languages.python import PythonGenerator
    from .languages.typescript import TypeScriptGenerator

    registry.register(
        "python",
        PythonGenerator,
        aliases=["py"],
        description="dataclasses and sqlite3 functions",
    )
    registry.register(
        "typescript",
        TypeScriptGenerator,
        aliases=["ts", "bun"],
        description="interfaces and bun:sqlite functions",
    )


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    """Get a configured generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Info for every registered language, keyed by primary name."""
    return {name: get_language_info(name) for name in list_supported_languages()}
