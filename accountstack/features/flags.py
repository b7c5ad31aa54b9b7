"""Process-local feature flags.

Flags are seeded from settings (FEATURE_* environment variables) when the
service starts and can only change afterwards through explicit calls to
set() or set_many(), e.g. from the admin endpoint or tests.

Known flags:
    mask_amounts (default off)      hide balances and credit limits
    local_currency (default on)     show currency for the caller's country
    advanced_filters (default off)  honour date/category/amount transaction filters
    insights_v2 (default off)       use the V2 insights algorithm
    alerts_enabled (default on)     serve the alerts endpoint
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping

from accountstack.config import Settings
from accountstack.infrastructure.observability.metrics import flag_update_counter
from accountstack.utils.locks import ReadWriteLock

logger = logging.getLogger(__name__)

MASK_AMOUNTS = "mask_amounts"
LOCAL_CURRENCY = "local_currency"
ADVANCED_FILTERS = "advanced_filters"
INSIGHTS_V2 = "insights_v2"
ALERTS_ENABLED = "alerts_enabled"

DEFAULT_FLAGS: Mapping[str, bool] = MappingProxyType(
    {
        MASK_AMOUNTS: False,
        LOCAL_CURRENCY: True,
        ADVANCED_FILTERS: False,
        INSIGHTS_V2: False,
        ALERTS_ENABLED: True,
    }
)


class FeatureFlags:
    """Named boolean toggles guarded by a read/write lock"""

    def __init__(self, initial: Mapping[str, bool] | None = None):
        self._lock = ReadWriteLock()
        self._values: Dict[str, bool] = dict(DEFAULT_FLAGS)
        if initial:
            self._values.update({name: bool(value) for name, value in initial.items()})

    @classmethod
    def from_settings(cls, settings: Settings) -> "FeatureFlags":
        flags = cls(
            {
                MASK_AMOUNTS: settings.feature_mask_amounts,
                LOCAL_CURRENCY: settings.feature_local_currency,
                ADVANCED_FILTERS: settings.feature_advanced_filters,
                INSIGHTS_V2: settings.feature_insights_v2,
                ALERTS_ENABLED: settings.feature_alerts_enabled,
            }
        )
        logger.info("Feature flags initialized", extra={"flags": flags.snapshot()})
        return flags

    def is_enabled(self, name: str) -> bool:
        """Current value of a flag; unknown flags are off"""
        with self._lock.read_locked():
            return self._values.get(name, False)

    def snapshot(self) -> Dict[str, bool]:
        """Consistent copy of every flag, for shaping a whole response"""
        with self._lock.read_locked():
            return dict(self._values)

    def set(self, name: str, enabled: bool) -> None:
        self.set_many({name: enabled})

    def set_many(self, updates: Mapping[str, bool]) -> None:
        """Apply all updates in one critical section so readers never see a partial change"""
        with self._lock.write_locked():
            for name, enabled in updates.items():
                self._values[name] = bool(enabled)
        for name, enabled in updates.items():
            flag_update_counter.labels(flag=name).inc()
            logger.info("Feature flag updated", extra={"flag": name, "enabled": bool(enabled)})
