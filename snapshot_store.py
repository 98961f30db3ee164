# In-memory holding area for parsed pages between the fetch and rewrite phases
from exceptions import DuplicateSnapshotError


class SnapshotStore:
    """
    Maps page URL -> PageDocument for one session.

    Pages are added during the fetch phase and read back during the rewrite
    phase, once the complete visited set is known. Used as a context manager
    the store is cleared on exit so no document outlives its session.
    """

    def __init__(self):
        self._pages = {}

    def add(self, url, document):
        if url in self._pages:
            raise DuplicateSnapshotError(f"Page already stored: {url}")
        self._pages[url] = document

    def get(self, url):
        return self._pages.get(url)

    def items(self):
        """(url, document) pairs in insertion order."""
        return list(self._pages.items())

    def urls(self):
        return list(self._pages)

    def clear(self):
        self._pages.clear()

    def __contains__(self, url):
        return url in self._pages

    def __len__(self):
        return len(self._pages)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()
        return False
