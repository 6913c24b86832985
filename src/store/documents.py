"""Known-document list and active-document selection.

The pipeline only ever talks to the DocumentStore protocol, so the same
service runs against a plain dict in tests and the API, and against
NiceGUI's per-user storage in the chat page.
"""

from collections.abc import MutableMapping
from typing import Any, Protocol

FILES_KEY = "uploaded_files"
ACTIVE_KEY = "active_file"


class DocumentStore(Protocol):
    """Names of successfully uploaded documents plus the active one."""

    def list(self) -> list[str]: ...

    def add(self, name: str) -> None: ...

    def get_active(self) -> str | None: ...

    def set_active(self, name: str | None) -> None: ...


class MappingDocumentStore:
    """DocumentStore kept in a mutable mapping.

    The most recently added name comes first; adding a known name moves it
    to the front instead of duplicating it.

    Args:
        storage: Backing mapping. A fresh dict is used when omitted.
    """

    def __init__(self, storage: MutableMapping[str, Any] | None = None) -> None:
        self._storage = storage if storage is not None else {}

    def list(self) -> list[str]:
        return list(self._storage.get(FILES_KEY, []))

    def add(self, name: str) -> None:
        if not name:
            raise ValueError("Document name must not be empty")
        files = [name, *(f for f in self.list() if f != name)]
        # Reassign so persistent backends notice the change
        self._storage[FILES_KEY] = files

    def get_active(self) -> str | None:
        return self._storage.get(ACTIVE_KEY) or None

    def set_active(self, name: str | None) -> None:
        """Select the document questions are asked against.

        Raises:
            KeyError: If name is not a known document.
        """
        if not name:
            self._storage.pop(ACTIVE_KEY, None)
            return
        if name not in self.list():
            raise KeyError(name)
        self._storage[ACTIVE_KEY] = name
