import os
from typing import List, Literal, Mapping

from pydantic import BaseModel, ValidationError

from prthreads.exceptions import ConfigError

FALSE_VALUES = ('0', 'false', 'no')


class PRThreadsConfig(BaseModel):
    platform: Literal['github', 'gitlab'] = 'github'
    token: str
    owner: str
    repo: str
    state: Literal['open', 'closed', 'all'] = 'open'
    include_discussion: bool = True
    pr_numbers: List[int] = []
    output_format: Literal['text', 'json'] = 'text'
    api_url: str = 'https://api.github.com'
    gitlab_url: str = 'https://gitlab.com'


def _parse_pr_numbers(value: str) -> List[int]:
    try:
        return [int(number) for number in value.split(',') if number.strip()]
    except ValueError as e:
        raise ConfigError(f"Invalid PRTHREADS_PR_NUMBERS value: {str(e)}")


def config_from_env(environ: Mapping[str, str] = os.environ) -> PRThreadsConfig:
    platform = environ.get('PRTHREADS_PLATFORM', 'github').lower()

    token = environ.get('PERSONAL_ACCESS_TOKEN')
    if not token:
        token = environ.get('GITLAB_TOKEN' if platform == 'gitlab' else 'GITHUB_TOKEN')

    owner = environ.get('GITHUB_REPO_OWNER')
    repo = environ.get('GITHUB_REPO')
    if not (owner and repo) and platform == 'gitlab' and environ.get('CI_PROJECT_PATH'):
        # Nested groups keep every segment but the last in the owner
        owner, _, repo = environ['CI_PROJECT_PATH'].rpartition('/')
    if not (owner and repo) and environ.get('GITHUB_REPOSITORY'):
        owner, _, repo = environ['GITHUB_REPOSITORY'].partition('/')

    if not token:
        raise ConfigError("PERSONAL_ACCESS_TOKEN must be defined")
    if not all([owner, repo]):
        raise ConfigError("Missing required environment variables: GITHUB_REPO_OWNER, GITHUB_REPO")

    try:
        return PRThreadsConfig(
            platform=platform,
            token=token,
            owner=owner,
            repo=repo,
            state=environ.get('PRTHREADS_STATE', 'open').lower(),
            include_discussion=environ.get('PRTHREADS_INCLUDE_DISCUSSION', 'true').lower() not in FALSE_VALUES,
            pr_numbers=_parse_pr_numbers(environ.get('PRTHREADS_PR_NUMBERS', '')),
            output_format=environ.get('PRTHREADS_OUTPUT', 'text').lower(),
            api_url=environ.get('GITHUB_API_URL', 'https://api.github.com'),
            gitlab_url=environ.get('CI_SERVER_URL', 'https://gitlab.com')
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {str(e)}")
