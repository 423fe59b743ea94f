import logging
from typing import Dict, List

import gitlab
import requests
from gitlab.v4.objects import Project

from prthreads.exceptions import SourceError
from prthreads.models import Comment, PullRequestSummary, parse_timestamp
from prthreads.source import CommentSource

logger = logging.getLogger(__name__)

# python-gitlab lets connection errors from requests through unwrapped
RETRIEVAL_ERRORS = (gitlab.exceptions.GitlabError, requests.RequestException, ValueError, KeyError)

MR_STATES = {
    'open': 'opened',
    'closed': 'closed',
    'all': 'all',
}


def _note_to_comment(note: Dict, parent_id=None) -> Comment:
    return Comment(
        id=note['id'],
        parent_id=parent_id,
        author=(note.get('author') or {}).get('username', ''),
        body=note.get('body') or '',
        created_at=parse_timestamp(note.get('created_at')),
        updated_at=parse_timestamp(note.get('updated_at')),
        path=(note.get('position') or {}).get('new_path')
    )


class GitLabCommentSource(CommentSource):
    def __init__(self, token: str, state: str = 'open', gitlab_url: str = 'https://gitlab.com'):
        self.token = token
        self.state = MR_STATES.get(state, state)
        self.gitlab_url = gitlab_url
        self.gl = gitlab.Gitlab(self.gitlab_url, private_token=token)
        self._projects: Dict[str, Project] = {}

    def get_project(self, owner: str, repo: str) -> Project:
        project_path = f'{owner}/{repo}'
        if project_path not in self._projects:
            try:
                self._projects[project_path] = self.gl.projects.get(project_path)
            except RETRIEVAL_ERRORS as e:
                raise SourceError(f"Error getting project {project_path}: {str(e)}") from e
        return self._projects[project_path]

    def list_pull_requests(self, owner: str, repo: str) -> List[PullRequestSummary]:
        try:
            merge_requests = self.get_project(owner, repo).mergerequests.list(state=self.state, iterator=True)
            return [PullRequestSummary(
                number=request.iid,
                author=(request.author or {}).get('username', ''),
                author_id=(request.author or {}).get('id', 0),
                state=request.state,
                title=request.title or ''
            ) for request in merge_requests]
        except RETRIEVAL_ERRORS as e:
            raise SourceError(f"Error listing merge requests: {str(e)}") from e

    def _discussions(self, owner: str, repo: str, number: int) -> List[List[Dict]]:
        try:
            request = self.get_project(owner, repo).mergerequests.get(number)
            return [discussion.attributes.get('notes', [])
                    for discussion in request.discussions.list(iterator=True)]
        except RETRIEVAL_ERRORS as e:
            raise SourceError(f"Error listing discussions for MR {number}: {str(e)}") from e

    def _comments(self, owner: str, repo: str, number: int, diff_notes: bool) -> List[Comment]:
        comments = []
        try:
            for notes in self._discussions(owner, repo, number):
                notes = [note for note in notes if not note.get('system')]
                if not notes or (notes[0].get('type') == 'DiffNote') != diff_notes:
                    continue

                # Each note in a discussion answers the one before it
                parent_id = None
                for note in notes:
                    comments.append(_note_to_comment(note, parent_id))
                    parent_id = note['id']
        except RETRIEVAL_ERRORS as e:
            raise SourceError(f"Error reading notes for MR {number}: {str(e)}") from e

        return comments

    def list_review_comments(self, owner: str, repo: str, pr_number: int) -> List[Comment]:
        return self._comments(owner, repo, pr_number, diff_notes=True)

    def list_discussion_comments(self, owner: str, repo: str, pr_number: int) -> List[Comment]:
        return self._comments(owner, repo, pr_number, diff_notes=False)
