from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Optional, TypeVar

from components.authservice.contracts import OperatorCredential, PasswordHasherPort
from .contracts import StoreState

logger = logging.getLogger("configstore")

T = TypeVar("T")


class StoreBackend:
    """Port interface for where the store document lives."""

    def load(self) -> Optional[dict]:
        raise NotImplementedError

    def save(self, document: dict) -> None:
        raise NotImplementedError


class InMemoryBackend(StoreBackend):
    """Keeps the document for the life of the process only."""

    def __init__(self, document: Optional[dict] = None):
        self._document = copy.deepcopy(document)

    def load(self) -> Optional[dict]:
        return copy.deepcopy(self._document)

    def save(self, document: dict) -> None:
        self._document = copy.deepcopy(document)


class JsonFileBackend(StoreBackend):
    """Single JSON document on disk, replaced atomically on every save."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, document: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise


class OperatorStore:
    """
    Owner of the single StoreState for one application instance.

    The state is loaded (or bootstrapped from the configured operator
    credential) on first access. Mutations go through `update`, which runs
    under a lock on a deep copy, persists it, and only then swaps it in as
    the live state, so a failing mutation or a failing save changes nothing.
    The live state object is never mutated in place, which lets `snapshot`
    read without taking the lock once loaded.
    """

    def __init__(
        self,
        backend: StoreBackend,
        *,
        hasher: PasswordHasherPort,
        admin_email: str,
        admin_password: str,
    ):
        self.backend = backend
        self._hasher = hasher
        self._admin_email = admin_email
        self._admin_password = admin_password
        self._state: Optional[StoreState] = None
        self._lock = threading.RLock()

    def _ensure_loaded(self) -> StoreState:
        with self._lock:
            if self._state is None:
                document = self.backend.load()
                if document is None:
                    state = StoreState(
                        user=OperatorCredential(
                            email=self._admin_email,
                            password_hash=self._hasher.hash(self._admin_password),
                        )
                    )
                    self.backend.save(_dump(state))
                    logger.info("store.initialised", extra={"backend": type(self.backend).__name__})
                else:
                    state = StoreState.model_validate(document)
                self._state = state
            return self._state

    def snapshot(self) -> StoreState:
        state = self._state
        if state is None:
            state = self._ensure_loaded()
        return state.model_copy(deep=True)

    def update(self, fn: Callable[[StoreState], T]) -> T:
        """Atomically read-modify-persist the store and return fn's result."""
        with self._lock:
            draft = self._ensure_loaded().model_copy(deep=True)
            result = fn(draft)
            self.backend.save(_dump(draft))
            self._state = draft
            return result


def _dump(state: StoreState) -> dict:
    return state.model_dump(by_alias=True, mode="json")
