# Data records shared between the crawl phases
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from html_processor import Element, PageDocument


@dataclass(frozen=True)
class CrawlSession:
    """One crawl run; every other record lives within its lifetime."""
    start_url: str
    domain: str
    archive_path: str
    page_budget: int
    started_at: datetime


@dataclass
class AssetReference:
    """A stylesheet, image or script found while fetching a single page."""
    source_url: str
    local_path: str
    kind: str
    element: 'Element' # owns the reference attribute
    attribute: str


@dataclass
class FetchResult:
    """Successful outcome of fetching one page and its assets."""
    document: 'PageDocument'
    discovered_links: List[str]
    assets_saved: int = 0
    assets_failed: int = 0


@dataclass(frozen=True)
class Manifest:
    start_url: str
    entrypoint: str
    archived_at: str
    crawled_pages: List[str]

    def to_dict(self):
        return {
            'startUrl': self.start_url,
            'entrypoint': self.entrypoint,
            'archivedAt': self.archived_at,
            'crawledPages': list(self.crawled_pages),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            start_url=data['startUrl'],
            entrypoint=data['entrypoint'],
            archived_at=data['archivedAt'],
            crawled_pages=list(data['crawledPages']),
        )


@dataclass
class CrawlReport:
    session: CrawlSession
    crawled_pages: List[str]
    failed_pages: List[str] = field(default_factory=list)
    manifest_path: Optional[str] = None
