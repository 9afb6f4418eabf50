"""BaseService — shared foundation for odtctl services.

Every service receives the frozen settings and, optionally, a plugin
manager. Services never cache filesystem handles between calls.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from odtctl.config.settings import OdtSettings
    from odtctl.plugins.manager import PluginManager


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CreateService(BaseService):
            def create_document(self, filename: str, ...) -> ServiceResult:
                today = self._today(today)
                ...
    """

    def __init__(self, settings: OdtSettings, plugins: PluginManager | None = None) -> None:
        self._settings = settings
        self._plugins = plugins

    @staticmethod
    def _today(today: date | None) -> date:
        """Injected date, or the local calendar date."""
        return today if today is not None else date.today()
