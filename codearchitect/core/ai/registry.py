"""
Provider Registry

Provider name -> configuration, seeded from the built-in catalog and
overlaid with the records persisted under the ``providers`` config key.
"""

import logging
from typing import Any, Dict, List, Optional

from codearchitect.core.ai.base import ModelInfo, ProviderConfig
from codearchitect.core.ai.catalog import default_providers

logger = logging.getLogger(__name__)

PROVIDERS_KEY = "providers"


class ProviderRegistry:
    """
    Holds the provider records and the active-provider selection.

    The config service is anything with ``get(key)``, ``set(key, value)``
    and ``save()``; passing None keeps the registry in memory only.
    """

    def __init__(self, config_service: Optional[Any] = None):
        self.config_service = config_service
        self._providers: List[ProviderConfig] = []
        self.reload()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _persisted_records(self) -> Dict[str, Dict[str, Any]]:
        if self.config_service is None:
            return {}
        saved = self.config_service.get(PROVIDERS_KEY)
        if isinstance(saved, dict):
            return {name: dict(rec, name=name) for name, rec in saved.items() if isinstance(rec, dict)}
        if isinstance(saved, list):
            # Older configs stored a plain list of records
            return {rec["name"]: rec for rec in saved if isinstance(rec, dict) and rec.get("name")}
        return {}

    def reload(self) -> List[ProviderConfig]:
        """Defaults shallow-merged with persisted records of the same name."""
        persisted = self._persisted_records()
        preferred = [name for name, rec in persisted.items() if rec.get("enabled") is True]
        providers: List[ProviderConfig] = []

        for default in default_providers():
            saved = persisted.pop(default.name, None)
            if saved is None:
                providers.append(default)
                continue
            try:
                providers.append(ProviderConfig.from_dict({**default.to_dict(), **saved}))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Ignoring invalid saved config for {default.name}: {e}")
                providers.append(default)

        # Providers that only exist in the config file
        for name, saved in persisted.items():
            try:
                providers.append(ProviderConfig.from_dict(saved))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Ignoring invalid saved provider {name}: {e}")

        self._providers = providers
        self._keep_single_active(preferred)
        return self.get_available_providers()

    def _keep_single_active(self, preferred: List[str]) -> None:
        """
        At most one provider stays enabled after a reload.

        A provider the user enabled in the config file wins over one that
        is only enabled by default; otherwise the first enabled one does.
        """
        enabled = [p.name for p in self._providers if p.enabled]
        active = next((name for name in enabled if name in preferred), None)
        if active is None and enabled:
            active = enabled[0]
        if len(enabled) > 1:
            logger.warning(f"Several providers enabled ({', '.join(enabled)}), keeping {active}")
        for provider in self._providers:
            provider.enabled = provider.name == active

    def save(self) -> bool:
        if self.config_service is None:
            return True
        self.config_service.set(
            PROVIDERS_KEY, {p.name: p.to_dict() for p in self._providers}
        )
        return self.config_service.save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_available_providers(self) -> List[ProviderConfig]:
        return [p.copy() for p in self._providers]

    def get_provider(self, name: str) -> Optional[ProviderConfig]:
        for provider in self._providers:
            if provider.name == name:
                return provider.copy()
        return None

    def get_active_provider(self) -> Optional[ProviderConfig]:
        for provider in self._providers:
            if provider.enabled:
                return provider.copy()
        return None

    def get_available_models(self) -> List[ModelInfo]:
        active = self.get_active_provider()
        return list(active.models) if active else []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_active_provider(self, name: str) -> ProviderConfig:
        """
        Enable ``name`` and disable every other provider, then persist.

        Raises:
            ValueError: If no provider has that name
        """
        if not any(p.name == name for p in self._providers):
            raise ValueError(f"Unknown provider: {name}")

        for provider in self._providers:
            provider.enabled = provider.name == name
        self.save()
        logger.info(f"Active provider set to {name}")
        return self.get_provider(name)

    def update_provider(self, name: str, **changes: Any) -> ProviderConfig:
        """
        Change fields of one provider (api_key, base_url, models) and persist.

        ``enabled`` is managed by set_active_provider only.
        """
        changes.pop("enabled", None)
        for index, provider in enumerate(self._providers):
            if provider.name == name:
                self._providers[index] = provider.copy(**changes)
                self.save()
                return self._providers[index].copy()
        raise ValueError(f"Unknown provider: {name}")
