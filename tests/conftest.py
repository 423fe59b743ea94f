"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from prthreads.models import Comment, PullRequestSummary

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_comment():
    """Build a Comment whose created_at is offset by `minute` minutes."""
    def _make(id, parent_id=None, author="alice", minute=0, **kwargs):
        created = BASE_TIME + timedelta(minutes=minute)
        return Comment(
            id=id,
            parent_id=parent_id,
            author=author,
            body=kwargs.pop("body", f"comment {id}"),
            created_at=created,
            updated_at=created,
            **kwargs,
        )
    return _make


@pytest.fixture
def pr_summary():
    return PullRequestSummary(number=7, author="octocat", author_id=583231, state="open", title="Add threads")
