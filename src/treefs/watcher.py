"""Change notifications for a directory, backed by watchdog.

Usage:
    watcher = await fs.watch(path)
    watcher.on("add", lambda p: print("added", p)).on("unlink", print)
    ...
    watcher.close()
"""

import logging
import os
import threading
import types
from collections import defaultdict
from pathlib import Path
from typing import Callable, DefaultDict, List, Optional, Type

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from treefs.types import PathType

logger = logging.getLogger(__name__)

EVENTS = ("add", "change", "unlink", "addDir", "unlinkDir", "error")

Listener = Callable[..., None]


class _EventDispatcher(FileSystemEventHandler):
    """Translate watchdog events into watcher event names."""

    def __init__(self, watcher: "Watcher"):
        self.watcher = watcher

    def on_created(self, event: FileSystemEvent) -> None:
        self.watcher.emit("addDir" if event.is_directory else "add", os.fsdecode(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        # directory mtime changes are implied by the entry events
        if not event.is_directory:
            self.watcher.emit("change", os.fsdecode(event.src_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        self.watcher.emit("unlinkDir" if event.is_directory else "unlink", os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        self.on_deleted(event)
        self.watcher.emit("addDir" if event.is_directory else "add", os.fsdecode(event.dest_path))


class Watcher:
    """Event-emitting watcher over a directory tree.

    Listeners are registered per event name with ``on`` and are called from the
    observer thread with the absolute path of the affected entry. An exception raised
    by a listener is passed to the ``error`` listeners; without any, it is logged.

    Attributes:
        path (str): The watched directory.
        recursive (bool): Whether subdirectories are watched too.
    """

    def __init__(self, path: PathType, recursive: bool = True):
        self.path = os.fspath(path)
        self.recursive = recursive
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
        self._lock = threading.Lock()
        self._observer: Optional[Observer] = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def on(self, event: str, listener: Listener) -> "Watcher":
        """Register ``listener`` for ``event``; returns the watcher for chaining.

        Raises:
            ValueError: If ``event`` is not one of EVENTS.
        """
        if event not in EVENTS:
            raise ValueError(f"Unknown event {event!r}; expected one of {', '.join(EVENTS)}")
        with self._lock:
            self._listeners[event].append(listener)
        return self

    def emit(self, event: str, *args: object) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event, ()))
            has_error_listeners = bool(self._listeners.get("error"))
        for listener in listeners:
            try:
                listener(*args)
            except Exception as e:
                if event == "error" or not has_error_listeners:
                    logger.exception("Watcher listener for %r failed", event)
                else:
                    self.emit("error", e)

    def start(self) -> "Watcher":
        """Start watching. The watches are in place once this returns.

        Raises:
            FileNotFoundError: If the path doesn't exist.
        """
        if self._observer is not None:
            return self
        if not Path(self.path).exists():
            raise FileNotFoundError(f"Watch path does not exist: {self.path}")

        observer = Observer()
        observer.schedule(_EventDispatcher(self), self.path, recursive=self.recursive)
        observer.start()
        self._observer = observer
        logger.debug("Watching %s", self.path)
        return self

    def close(self) -> None:
        """Stop watching and join the observer thread."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        logger.debug("Stopped watching %s", self.path)

    def __enter__(self) -> "Watcher":
        return self.start()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()
