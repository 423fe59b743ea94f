import logging
import sys

from prthreads.aggregator import DiscussionAggregator
from prthreads.config import PRThreadsConfig, config_from_env
from prthreads.exceptions import ThreadsError
from prthreads.git_github import GitHubCommentSource
from prthreads.git_gitlab import GitLabCommentSource
from prthreads.report import format_report
from prthreads.source import CommentSource

logger = logging.getLogger(__name__)


def create_source(config: PRThreadsConfig) -> CommentSource:
    if config.platform == 'gitlab':
        return GitLabCommentSource(token=config.token, state=config.state, gitlab_url=config.gitlab_url)
    return GitHubCommentSource(token=config.token, state=config.state, api_url=config.api_url)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = config_from_env()

        # Initialize comment source and collect threads
        source = create_source(config)
        aggregator = DiscussionAggregator(source=source, config=config)
        discussions = aggregator.collect()

        print(format_report(discussions, config.output_format))

        logger.info(f"Reported {len(discussions)} pull requests")
        return 0

    except ThreadsError as e:
        logger.error(f"Threads Error: {str(e)}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
