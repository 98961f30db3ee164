# Module for the breadth-first crawl frontier
from collections import deque


class CrawlFrontier:
    """
    FIFO queue of pending URLs paired with the set of visited URLs.

    A URL is enqueued at most once, so it is fetched at most once even when
    its fetch failed. The frontier is exhausted when the queue is empty or
    the visited set reaches the budget.
    """

    def __init__(self, start_url, page_budget):
        if page_budget < 1:
            raise ValueError("page_budget must be at least 1")
        self.page_budget = page_budget
        self._queue = deque([start_url])
        self._enqueued = {start_url} # Every URL ever queued, including popped ones
        self._visited = set()

    def has_next(self):
        return bool(self._queue) and len(self._visited) < self.page_budget

    def pop(self):
        """Removes and returns the oldest pending URL."""
        return self._queue.popleft()

    def is_visited(self, url):
        return url in self._visited

    def mark_visited(self, url):
        self._visited.add(url)

    def enqueue_links(self, links):
        """Enqueues each link never queued before. Returns the count added."""
        added = 0
        for link in links:
            if link in self._visited or link in self._enqueued:
                continue
            self._queue.append(link)
            self._enqueued.add(link)
            added += 1
        return added

    @property
    def visited(self):
        """Snapshot of the visited set."""
        return frozenset(self._visited)

    @property
    def pending_count(self):
        return len(self._queue)

    def __len__(self):
        return len(self._visited)
