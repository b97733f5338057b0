"""Process-wide attachment point for the preferences store.

Settings look the store up here on every access, so a store can be attached
after the settings themselves were declared at import time.
"""

from typing import Optional

from loguru import logger

from prefcache.core.config import settings
from prefcache.store.base import ConfigStore

_store: Optional[ConfigStore] = None


def init_preferences(store: ConfigStore) -> None:
    """Attach ``store`` as the process-wide preferences backend.

    A previously attached store is replaced, not flushed.
    """
    global _store
    if _store is not None and _store is not store:
        logger.warning("Replacing an attached preferences store")
    _store = store
    logger.info(f"Preferences {settings.PREFS_VERSION} attached: {type(store).__name__}")


def finish_preferences() -> bool:
    """Flush and detach the current store.

    Returns:
        Result of the final flush, or False when nothing was attached.
    """
    global _store
    store, _store = _store, None
    if store is None:
        return False
    ok = store.flush()
    if not ok:
        logger.error("Final preferences flush failed")
    return ok


def get_config() -> Optional[ConfigStore]:
    """The attached store, or None when preferences are unavailable."""
    return _store
