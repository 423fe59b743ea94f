import json
from dataclasses import asdict
from datetime import datetime
from typing import Dict, List, Optional

from prthreads.models import PullRequestDiscussion, Thread


def _format_time(value: Optional[datetime]) -> str:
    if value is None:
        return "unknown"
    return value.isoformat(timespec='seconds').replace('+00:00', 'Z')


def _ordered(threads: Dict[int, Thread]) -> List[Thread]:
    return sorted(
        threads.values(),
        key=lambda t: (t.root.created_at is not None, t.root.created_at or datetime.min, t.root.id)
    )


def format_threads(threads: Dict[int, Thread]) -> List[str]:
    lines = []
    for thread in _ordered(threads):
        lines.append(f"Thread {thread.root.id} (Root: {thread.root.author}): {thread.reply_count} replies")
        for i, reply in enumerate(thread.chronological_replies(), 1):
            lines.append(f"  Reply {i}: {reply.author} at {_format_time(reply.created_at)}")
    return lines


def format_discussion(discussion: PullRequestDiscussion) -> str:
    pr = discussion.pull_request
    title = f" {pr.title}" if pr.title else ""
    lines = [f"PR #{pr.number}{title} by {pr.author} ({pr.state})"]

    lines.append("")
    lines.append("Comment Threads:")
    lines.extend(format_threads(discussion.review_threads) or ["  (none)"])

    if discussion.discussion_threads:
        lines.append("")
        lines.append("Discussion Threads:")
        lines.extend(format_threads(discussion.discussion_threads))

    return '\n'.join(lines)


def format_report(discussions: List[PullRequestDiscussion], output_format: str = 'text') -> str:
    if output_format == 'json':
        return json.dumps([asdict(discussion) for discussion in discussions], indent=2, default=str)
    return '\n\n'.join(format_discussion(discussion) for discussion in discussions)
