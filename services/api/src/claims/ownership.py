"""Repository ownership verification.

Ownership is derived from the stored repository URL: the first path segment
after a GitHub host is the owner login, compared case-insensitively with the
claimant's GitHub username. No network calls are made.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from shared.config import DEFAULT_GITHUB_HOSTS


class OwnershipVerdict(str, Enum):
    VERIFIED_OWNER = "verified_owner"
    NOT_OWNER = "not_owner"
    UNVERIFIABLE = "unverifiable"


@dataclass(frozen=True)
class RepositoryRef:
    host: str
    owner: str
    name: str


OwnershipVerifier = Callable[[str | None, str], OwnershipVerdict]


def parse_repository(
    repository_url: str | None, hosts: Iterable[str] = DEFAULT_GITHUB_HOSTS
) -> RepositoryRef | None:
    """Split a GitHub repository URL into host, owner and repository name.

    Accepts ``https://github.com/owner/repo``, ``http://...`` and the
    scheme-less ``github.com/owner/repo``. Extra path segments (``/tree/main``)
    are ignored and a trailing ``.git`` is stripped. Returns None when the URL
    is not of the ``host/owner/repo`` shape or the host is not a GitHub host.
    """
    if not repository_url or not repository_url.strip():
        return None

    url = repository_url.strip()
    if "://" not in url:
        url = f"https://{url}"

    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
    except ValueError:
        return None

    if parts.scheme not in ("http", "https"):
        return None
    if host not in {h.lower() for h in hosts}:
        return None

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 2:  # noqa: PLR2004
        return None

    owner, name = segments[0], segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        return None

    return RepositoryRef(host=host, owner=owner, name=name)


def verify_ownership(
    repository_url: str | None,
    github_username: str,
    hosts: Iterable[str] = DEFAULT_GITHUB_HOSTS,
) -> OwnershipVerdict:
    """Decide whether ``github_username`` owns the repository at ``repository_url``."""
    repo = parse_repository(repository_url, hosts)
    if repo is None:
        return OwnershipVerdict.UNVERIFIABLE

    # GitHub logins are case-insensitive
    if github_username and repo.owner.casefold() == github_username.casefold():
        return OwnershipVerdict.VERIFIED_OWNER
    return OwnershipVerdict.NOT_OWNER


def make_verifier(hosts: Iterable[str]) -> OwnershipVerifier:
    """Bind the accepted GitHub hosts, returning a two-argument verifier."""
    accepted = tuple(hosts)

    def _verify(repository_url: str | None, github_username: str) -> OwnershipVerdict:
        return verify_ownership(repository_url, github_username, accepted)

    return _verify
