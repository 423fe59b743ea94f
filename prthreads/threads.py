import logging
from typing import Dict, Optional, Sequence

from prthreads.models import Comment, Thread

logger = logging.getLogger(__name__)


def find_root(comment: Comment, comments_by_id: Dict[int, Comment],
              resolved: Optional[Dict[int, int]] = None) -> int:
    """
    Follow the reply chain of a comment up to the id of its root.

    The walk stops at a comment without a parent, at a parent id that is not
    in the index (the last comment reached is reported as the root), or at a
    parent id already visited on this walk. Every comment visited is recorded
    in `resolved` so later walks sharing the same chain stop early.
    """
    if resolved is None:
        resolved = {}

    current = comment
    visited = [current.id]
    seen = {current.id}
    root_id = None

    while root_id is None:
        if current.id in resolved:
            root_id = resolved[current.id]
        elif current.parent_id is None:
            root_id = current.id
        elif current.parent_id not in comments_by_id or current.parent_id in seen:
            root_id = current.id
        else:
            current = comments_by_id[current.parent_id]
            visited.append(current.id)
            seen.add(current.id)

    for comment_id in visited:
        resolved[comment_id] = root_id

    return root_id


def organize_threads(comments: Sequence[Comment]) -> Dict[int, Thread]:
    """Group a discussion's comments into threads keyed by root comment id."""
    comments_by_id: Dict[int, Comment] = {}
    unique = []
    for comment in comments:
        if comment.id in comments_by_id:
            logger.debug(f"Ignoring duplicate comment {comment.id}")
            continue
        comments_by_id[comment.id] = comment
        unique.append(comment)

    threads: Dict[int, Thread] = {}
    for comment in unique:
        if comment.is_root:
            threads[comment.id] = Thread(root=comment, replies=[])

    resolved: Dict[int, int] = {}
    dropped = 0
    for comment in unique:
        if comment.is_root:
            continue

        root_id = find_root(comment, comments_by_id, resolved)
        thread = threads.get(root_id)
        if thread is None:
            dropped += 1
            continue
        thread.replies.append(comment)

    logger.debug(f"Organized {len(unique)} comments into {len(threads)} threads, dropped {dropped} replies")
    return threads
