"""Selection of the active store backend (local files or remote API)."""

import logging
from enum import Enum
from typing import Protocol

from src.common.config.settings import settings

logger = logging.getLogger(__name__)


class BackendMode(str, Enum):
    LOCAL = "LOCAL"
    REMOTE = "REMOTE"


class _ReachabilityCheck(Protocol):
    last_error: str | None

    def is_reachable(self) -> bool: ...


class BackendSelector:
    """Holds the current backend mode.

    Registries ask ``is_remote_active()`` at the start of every operation, so switching the
    mode takes effect on the very next call. Nothing here merges or reconciles the two stores.
    """

    def __init__(self, mode: BackendMode = BackendMode.LOCAL) -> None:
        self.mode = mode

    @classmethod
    def detect(cls, api_client: _ReachabilityCheck) -> "BackendSelector":
        """Chooses the initial mode: remote when enabled and reachable, local otherwise."""
        if not settings.REMOTE_API_ENABLED:
            logger.info("Remote store disabled by configuration, using local files.")
            return cls(BackendMode.LOCAL)
        if api_client.is_reachable():
            logger.info("Remote store reachable, using remote API.")
            return cls(BackendMode.REMOTE)
        logger.warning(f"Remote store unavailable ({api_client.last_error}), using local files.")
        return cls(BackendMode.LOCAL)

    def is_remote_active(self) -> bool:
        return self.mode is BackendMode.REMOTE

    def use_local(self, reason: str | None = None) -> None:
        if self.mode is not BackendMode.LOCAL:
            logger.warning(f"Switching to local store{': ' + reason if reason else ''}")
        self.mode = BackendMode.LOCAL

    def use_remote(self) -> None:
        if self.mode is not BackendMode.REMOTE:
            logger.info("Switching to remote store.")
        self.mode = BackendMode.REMOTE
