from prthreads.exceptions import ThreadsError, ConfigError, SourceError
from prthreads.models import Comment, Thread, PullRequestSummary, PullRequestDiscussion
from prthreads.threads import find_root, organize_threads
from prthreads.source import CommentSource
from prthreads.aggregator import DiscussionAggregator

__all__ = [
    'ThreadsError',
    'ConfigError',
    'SourceError',
    'Comment',
    'Thread',
    'PullRequestSummary',
    'PullRequestDiscussion',
    'find_root',
    'organize_threads',
    'CommentSource',
    'DiscussionAggregator'
]
