"""Minimal thread storage for the Chat Completions backend.

This is primarily an in-memory dict of thread_id -> Thread, with
optional JSON persistence under a data directory.

- In-memory access is the primary source of truth during a run.
- If a data_dir is configured, threads are also written to
  `data_dir/threads/<thread_id>.json` so that they survive a restart
  and can be inspected for debugging.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from ..models.thread_models import Thread, ThreadMessage


logger = logging.getLogger(__name__)

THREAD_ID_PREFIX = "thread_local_"

# Only ids this store generated may be turned into file names.
THREAD_ID_PATTERN = re.compile(r"^thread_local_[0-9a-f]+$")


class ThreadStore:
    """In-memory + optional file-backed thread store.

    Parameters
    ----------
    data_dir:
        Base directory for storing thread JSON files. If provided,
        threads will be written to and read from
        `data_dir/threads/<thread_id>.json`. If not provided, threads
        live in memory only.
    """

    def __init__(self, data_dir: Optional[str] = None) -> None:
        self._threads: Dict[str, Thread] = {}
        self._lock = Lock()
        self._data_dir: Optional[Path] = Path(data_dir) if data_dir else None

        if self._data_dir is not None:
            self._threads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def _threads_dir(self) -> Path:
        return self._data_dir / "threads"

    def create_thread(self, messages: Optional[List[dict]] = None) -> Thread:
        """Create a new thread seeded with {role, content} messages."""
        now = datetime.now(timezone.utc).isoformat()
        thread = Thread(
            thread_id=f"{THREAD_ID_PREFIX}{uuid4().hex}",
            messages=[
                ThreadMessage(role=m["role"], content=m["content"], timestamp=now)
                for m in (messages or [])
            ],
        )
        self.save_thread(thread)
        return thread

    def get_thread(self, thread_id: str) -> Optional[Thread]:
        """Retrieve an existing thread by ID.

        Lookup order: in-memory cache, then disk (if configured).
        Returns None when the thread is unknown or its file is unreadable.
        """
        with self._lock:
            if thread_id in self._threads:
                return self._threads[thread_id]

        if self._data_dir is None or not THREAD_ID_PATTERN.match(thread_id):
            return None

        path = self._threads_dir / f"{thread_id}.json"
        if not path.is_file():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                thread = Thread(**json.load(f))
        except (OSError, ValueError, ValidationError):
            logger.warning("[THREADS] could not load %s", path, exc_info=True)
            return None

        with self._lock:
            self._threads[thread_id] = thread
        return thread

    def append_message(self, thread_id: str, role: str, content: str) -> Thread:
        """Append a message to an existing thread and persist it.

        Raises KeyError if the thread does not exist.
        """
        thread = self.get_thread(thread_id)
        if thread is None:
            raise KeyError(thread_id)
        thread.messages.append(
            ThreadMessage(
                role=role,
                content=content,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )
        self.save_thread(thread)
        return thread

    def save_thread(self, thread: Thread) -> None:
        """Persist the given thread in memory and to disk (if enabled)."""
        with self._lock:
            self._threads[thread.thread_id] = thread
        self._persist_thread(thread)

    def _persist_thread(self, thread: Thread) -> None:
        if self._data_dir is None:
            return

        threads_dir = self._threads_dir
        threads_dir.mkdir(parents=True, exist_ok=True)
        path = threads_dir / f"{thread.thread_id}.json"

        with path.open("w", encoding="utf-8") as f:
            json.dump(thread.model_dump(), f, ensure_ascii=False, indent=2)
