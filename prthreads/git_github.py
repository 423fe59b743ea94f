import logging
from typing import Dict, List

import requests
from github import Github, GithubException
from github.Repository import Repository

from prthreads.exceptions import SourceError
from prthreads.models import Comment, PullRequestSummary
from prthreads.source import CommentSource

logger = logging.getLogger(__name__)

# PyGithub raises requests' own errors for connection failures
RETRIEVAL_ERRORS = (GithubException, requests.RequestException, ValueError, KeyError)


class GitHubCommentSource(CommentSource):
    def __init__(self, token: str, state: str = 'open', api_url: str = 'https://api.github.com'):
        self.token = token
        self.state = state
        self.api_url = api_url.rstrip('/')
        self.github = Github(token, base_url=self.api_url)
        self._repos: Dict[str, Repository] = {}

    def get_repo(self, owner: str, repo: str) -> Repository:
        repo_identifier = f'{owner}/{repo}'
        if repo_identifier not in self._repos:
            try:
                self._repos[repo_identifier] = self.github.get_repo(repo_identifier)
            except RETRIEVAL_ERRORS as e:
                raise SourceError(f"Error getting repository {repo_identifier}: {str(e)}") from e
        return self._repos[repo_identifier]

    def list_pull_requests(self, owner: str, repo: str) -> List[PullRequestSummary]:
        try:
            pulls = self.get_repo(owner, repo).get_pulls(state=self.state)
            return [PullRequestSummary(
                number=pr.number,
                author=pr.user.login if pr.user else '',
                author_id=pr.user.id if pr.user else 0,
                state=pr.state,
                title=pr.title or ''
            ) for pr in pulls]
        except RETRIEVAL_ERRORS as e:
            raise SourceError(f"Error listing pull requests: {str(e)}") from e

    def list_review_comments(self, owner: str, repo: str, pr_number: int) -> List[Comment]:
        try:
            request = self.get_repo(owner, repo).get_pull(pr_number)
            comments = request.get_review_comments()
            # in_reply_to_id is absent on the first comment of a thread
            return [Comment(
                id=comment.id,
                parent_id=comment.in_reply_to_id,
                author=comment.user.login if comment.user else '',
                body=comment.body or '',
                created_at=comment.created_at,
                updated_at=comment.updated_at,
                path=comment.path
            ) for comment in comments]
        except RETRIEVAL_ERRORS as e:
            raise SourceError(f"Error listing code comments for PR {pr_number}: {str(e)}") from e

    def list_discussion_comments(self, owner: str, repo: str, pr_number: int) -> List[Comment]:
        try:
            request = self.get_repo(owner, repo).get_pull(pr_number)
            return [Comment(
                id=comment.id,
                parent_id=None,
                author=comment.user.login if comment.user else '',
                body=comment.body or '',
                created_at=comment.created_at,
                updated_at=comment.updated_at
            ) for comment in request.get_issue_comments()]
        except RETRIEVAL_ERRORS as e:
            raise SourceError(f"Error listing discussion comments for PR {pr_number}: {str(e)}") from e
