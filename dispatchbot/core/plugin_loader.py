import importlib.util
import inspect
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

from .registry import BotRegistry

logger = logging.getLogger(__name__)


class PluginMetadata:
    def __init__(
        self,
        name: str,
        version: str = "1.0.0",
        author: str = "Unknown",
        description: str = "",
    ) -> None:
        self.name = name
        self.version = version
        self.author = author
        self.description = description


class PluginLoader:
    """Imports plugin modules from directories so they can fill the registry.

    Every ``.py`` file below a plugin directory is a plugin, except names
    starting with ``_``. A plugin registers itself through a
    ``setup(registry)`` function, through functions decorated with
    ``@command``, or both.
    """

    def __init__(self, registry: BotRegistry) -> None:
        self.registry = registry
        self.plugins: Dict[str, Any] = {}
        self.plugin_metadata: Dict[str, PluginMetadata] = {}
        self.plugin_directories: List[Path] = []

    def add_plugin_directory(self, directory: str) -> None:
        path = Path(directory)
        if path.exists() and path.is_dir():
            self.plugin_directories.append(path)
            logger.info(f"Added plugin directory: {path}")
        else:
            logger.warning(f"Plugin directory does not exist: {path}")

    def _plugin_name(self, directory: Path, path: Path) -> str:
        return ".".join(path.relative_to(directory).with_suffix("").parts)

    def discover_plugins(self) -> Dict[str, Path]:
        discovered: Dict[str, Path] = {}

        for directory in self.plugin_directories:
            for plugin_path in sorted(directory.rglob("*.py")):
                relative = plugin_path.relative_to(directory)
                if any(part.startswith("_") for part in relative.parts):
                    continue
                name = self._plugin_name(directory, plugin_path)
                discovered.setdefault(name, plugin_path)

        logger.info(f"Discovered plugins: {list(discovered)}")
        return discovered

    def _load_plugin_module(self, plugin_name: str, path: Path) -> Any:
        module_name = f"plugins.{plugin_name}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if not spec or not spec.loader:
            raise ImportError(f"Plugin {plugin_name} not found at {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            sys.modules.pop(module_name, None)
            raise
        return module

    def _extract_metadata(self, plugin_name: str, module: Any) -> PluginMetadata:
        if hasattr(module, "PLUGIN_METADATA"):
            meta_dict = module.PLUGIN_METADATA
            return PluginMetadata(
                name=meta_dict.get("name", plugin_name),
                version=meta_dict.get("version", "1.0.0"),
                author=meta_dict.get("author", "Unknown"),
                description=meta_dict.get("description", ""),
            )
        else:
            return PluginMetadata(name=plugin_name)

    def _register_decorated_commands(self, plugin_name: str, module: Any) -> int:
        count = 0
        for _, obj in inspect.getmembers(module, inspect.isfunction):
            command = getattr(obj, "_command", None)
            if command is None or obj.__module__ != module.__name__:
                continue
            self.registry.register_command(replace(command, plugin_name=plugin_name))
            count += 1
            logger.debug(f"Registered command {command.name} from plugin {plugin_name}")
        return count

    def load_plugin(self, plugin_name: str, path: Path) -> bool:
        try:
            if plugin_name in self.plugins:
                logger.info(f"Plugin {plugin_name} is already loaded")
                return True

            module = self._load_plugin_module(plugin_name, path)
            metadata = self._extract_metadata(plugin_name, module)

            # A plugin that fails halfway leaves nothing behind in the registry
            try:
                with self.registry.staged():
                    count = self._register_decorated_commands(plugin_name, module)
                    if hasattr(module, "setup"):
                        module.setup(self.registry)
            except Exception:
                sys.modules.pop(module.__name__, None)
                raise

            self.plugins[plugin_name] = module
            self.plugin_metadata[plugin_name] = metadata

            logger.info(f"Successfully loaded plugin: {plugin_name} v{metadata.version} ({count} decorated commands)")
            return True

        except Exception as e:
            logger.error(f"Failed to load plugin {plugin_name}: {e}")
            return False

    def load_all_plugins(self, enabled_plugins: Optional[List[str]] = None) -> List[str]:
        """Load discovered plugins, or only the enabled ones when a list is given.

        An enabled entry matches a plugin by its full dotted name or by its
        top-level folder, so ``moderation`` enables ``moderation.kick``.
        """
        loaded = []
        for plugin_name, path in self.discover_plugins().items():
            if enabled_plugins and not any(
                plugin_name == enabled or plugin_name.startswith(f"{enabled}.") for enabled in enabled_plugins
            ):
                continue
            if self.load_plugin(plugin_name, path):
                loaded.append(plugin_name)
        return loaded

    def get_plugin(self, plugin_name: str) -> Optional[Any]:
        return self.plugins.get(plugin_name)

    def get_loaded_plugins(self) -> List[str]:
        return list(self.plugins.keys())

    def get_plugin_info(self, plugin_name: str) -> Optional[PluginMetadata]:
        return self.plugin_metadata.get(plugin_name)
