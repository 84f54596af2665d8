"""Parsing of GitHub repository identifiers."""

import re
from typing import NamedTuple

_GITHUB_URL = re.compile(r'github\.com/([^/]+)/([^/?#]+)')


class RepositoryFormatError(ValueError):
    """The value is neither a GitHub repository URL nor an owner/repo token."""

    def __init__(self, value: str):
        super().__init__(f"Invalid GitHub repository format: {value}")
        self.value = value


class RepositoryId(NamedTuple):
    owner: str
    repo: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_repository(value: str) -> RepositoryId:
    """Parse a repository given as a URL containing github.com/<owner>/<repo> or as owner/repo.

    Extra path segments after the repository are ignored, as is a trailing ``.git``.

    Raises:
        RepositoryFormatError: The value cannot be interpreted as a repository
    """
    if 'github.com' in value:
        match = _GITHUB_URL.search(value)
        if match is None:
            raise RepositoryFormatError(value)
        owner, repo = match.group(1), match.group(2)
    elif '/' in value:
        owner, repo = value.split('/')[:2]
    else:
        raise RepositoryFormatError(value)

    if repo.endswith('.git'):
        repo = repo[:-len('.git')]

    owner, repo = owner.strip(), repo.strip()
    if not owner or not repo:
        raise RepositoryFormatError(value)

    return RepositoryId(owner, repo)
