"""pluggy wiring for odtctl.

Third-party plugins register under the ``odtctl.plugins`` entry-point
group. The platform launcher is registered by the CLI as a built-in.
Every dispatch helper turns plugin exceptions into warning strings.
"""

from __future__ import annotations

import inspect
import logging
from pathlib import Path

import pluggy

from odtctl.plugins.hookspecs import OdtctlHookSpec

PROJECT_NAME = "odtctl"
ENTRY_POINT_GROUP = "odtctl.plugins"
_IMPL_ATTR = f"{PROJECT_NAME}_impl"

logger = logging.getLogger(__name__)


class PluginManager:
    """Registers plugins and dispatches the odtctl hooks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(OdtctlHookSpec)
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return every registered name."""
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_class_plugins()
        self._loaded = True
        logger.debug("Loaded %d entry-point plugin(s)", count)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin %s", name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [name for name, _plugin in self._pm.list_name_plugin()]

    # -- hooks -------------------------------------------------------------

    def post_create(self, *, folder: Path, path: Path, filename: str, date: str) -> list[str]:
        """Notify plugins that a document was written."""
        try:
            self._pm.hook.post_create(
                folder=str(folder), path=str(path), filename=filename, date=date
            )
        except Exception as exc:
            logger.warning("post_create hook failed", exc_info=True)
            return [f"post_create hook failed: {exc}"]
        return []

    def open_document(self, path: Path) -> tuple[bool, list[str]]:
        """Ask plugins to open *path*; the first non-None answer wins.

        Returns ``(opened, warnings)``. A refusal, a missing answer, or an
        exception all leave the document unopened with one warning.
        """
        try:
            opened = bool(self._pm.hook.open_document(path=str(path)))
        except Exception as exc:
            logger.warning("open_document hook failed", exc_info=True)
            return False, [f"Could not open document automatically: {exc}"]
        if not opened:
            return False, [f"Could not open document automatically; open it manually: {path}"]
        return True, []

    # -- internal ----------------------------------------------------------

    def _instantiate_class_plugins(self) -> None:
        """Swap entry points that registered a class for an instance of it."""
        for name, plugin in list(self._pm.list_name_plugin()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Could not instantiate plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """True if any public attribute of *cls* carries an ``@hookimpl`` marker."""
        return any(
            getattr(member, _IMPL_ATTR, None) is not None
            for attr, member in inspect.getmembers(cls, callable)
            if not attr.startswith("_")
        )
