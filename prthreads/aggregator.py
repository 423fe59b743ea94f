import logging
from typing import List, Optional

from prthreads.config import PRThreadsConfig
from prthreads.exceptions import SourceError
from prthreads.models import PullRequestDiscussion, PullRequestSummary
from prthreads.source import CommentSource
from prthreads.threads import organize_threads

logger = logging.getLogger(__name__)


class DiscussionAggregator:
    def __init__(self, source: CommentSource, config: PRThreadsConfig):
        self.source = source
        self.owner = config.owner
        self.repo = config.repo
        self.include_discussion = config.include_discussion
        self.pr_numbers = set(config.pr_numbers)

    def process_pull_request(self, pr: PullRequestSummary) -> Optional[PullRequestDiscussion]:
        """Fetch one pull request's comments and rebuild its threads. Returns None if retrieval fails."""
        try:
            review_comments = self.source.list_review_comments(self.owner, self.repo, pr.number)
            discussion_comments = []
            if self.include_discussion:
                discussion_comments = self.source.list_discussion_comments(self.owner, self.repo, pr.number)
        except SourceError as e:
            logger.error(f"Skipping PR #{pr.number}: {str(e)}")
            return None

        logger.info(f"PR #{pr.number}: {len(review_comments)} review comments, "
                    f"{len(discussion_comments)} discussion comments")

        return PullRequestDiscussion(
            pull_request=pr,
            review_threads=organize_threads(review_comments),
            discussion_threads=organize_threads(discussion_comments)
        )

    def collect(self) -> List[PullRequestDiscussion]:
        pull_requests = self.source.list_pull_requests(self.owner, self.repo)
        if self.pr_numbers:
            pull_requests = [pr for pr in pull_requests if pr.number in self.pr_numbers]

        logger.info(f"Processing {len(pull_requests)} pull requests for {self.owner}/{self.repo}")

        discussions = []
        for i, pr in enumerate(pull_requests, 1):
            logger.debug(f"Processing PR {i}/{len(pull_requests)}")
            discussion = self.process_pull_request(pr)
            if discussion is not None:
                discussions.append(discussion)

        return discussions
