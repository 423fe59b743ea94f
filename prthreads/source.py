from abc import ABC, abstractmethod
from typing import List

from prthreads.models import Comment, PullRequestSummary


class CommentSource(ABC):
    @abstractmethod
    def __init__(self, token: str):
        """Initialize comment source with an access token"""
        pass

    @abstractmethod
    def list_pull_requests(self, owner: str, repo: str) -> List[PullRequestSummary]:
        """List pull/merge requests of a repository"""
        pass

    @abstractmethod
    def list_review_comments(self, owner: str, repo: str, pr_number: int) -> List[Comment]:
        """Get code review comments with their in-reply-to ids"""
        pass

    @abstractmethod
    def list_discussion_comments(self, owner: str, repo: str, pr_number: int) -> List[Comment]:
        """Get general (non-code) comments of the request"""
        pass
