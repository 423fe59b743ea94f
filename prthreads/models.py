from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the hosting APIs."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


@dataclass
class Comment:
    id: int
    parent_id: Optional[int] = None
    author: str = ''
    body: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    path: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass
class Thread:
    root: Comment
    replies: List[Comment] = field(default_factory=list)

    @property
    def reply_count(self) -> int:
        return len(self.replies)

    def chronological_replies(self) -> List[Comment]:
        # sorted() is stable, so replies sharing a timestamp keep input order
        return sorted(
            self.replies,
            key=lambda c: (c.created_at is not None, c.created_at or datetime.min)
        )


@dataclass
class PullRequestSummary:
    number: int
    author: str
    author_id: int
    state: str
    title: str = ''


@dataclass
class PullRequestDiscussion:
    pull_request: PullRequestSummary
    review_threads: Dict[int, Thread] = field(default_factory=dict)
    discussion_threads: Dict[int, Thread] = field(default_factory=dict)
