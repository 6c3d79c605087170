"""History Resolver - Last author and timestamp of a file from git history."""

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from ..config import ScanConfiguration

logger = logging.getLogger(__name__)

REPOSITORY_MARKER = '.git'

# Equivalent queries that differ only in how the date is printed.
LOG_VARIANTS: Tuple[Tuple[str, ...], ...] = (
    ('--pretty=format:%an|%ad', '--date=iso-strict'),
    ('--pretty=format:%an|%ad', '--date=iso'),
    ('--pretty=format:%an|%ci',),
)

GIT_DATE_FORMATS = ('%Y-%m-%d %H:%M:%S %z', '%Y-%m-%dT%H:%M:%S%z')


class HistoryFailure(Enum):
    """Reasons a last-change lookup produced no author."""
    NOT_A_REPOSITORY = "not_a_repository"
    NO_COMMITS = "no_commits"
    TOOL_NOT_INSTALLED = "tool_not_installed"
    TIMEOUT = "timeout"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class LastChangeInfo:
    """Outcome of a history lookup: an author, or a failure reason."""
    author: Optional[str] = None
    timestamp: Optional[datetime] = None
    raw_timestamp: Optional[str] = None
    repository_wide: bool = False  # Author is the configured user, not the file's last committer
    failure: Optional[HistoryFailure] = None
    detail: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.failure is None and bool(self.author)

    @classmethod
    def failed(cls, failure: HistoryFailure, detail: Optional[str] = None) -> 'LastChangeInfo':
        return cls(failure=failure, detail=detail)

    def to_dict(self) -> dict:
        return {
            'author': self.author,
            'timestamp': self.timestamp.isoformat() if self.timestamp else self.raw_timestamp,
            'repository_wide': self.repository_wide,
            'failure': self.failure.value if self.failure else None,
            'detail': self.detail,
        }


def find_repository_root(start) -> Optional[Path]:
    """Walk upward from start to the filesystem root looking for a .git entry."""
    current = Path(start).resolve()
    while True:
        if (current / REPOSITORY_MARKER).exists():
            return current
        if current.parent == current:
            return None
        current = current.parent


def parse_git_date(value: str) -> Optional[datetime]:
    """Parse the dates printed by the LOG_VARIANTS queries."""
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in GIT_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def classify_failure(exc: BaseException) -> LastChangeInfo:
    """Map an exception from a git invocation to a displayable failure."""
    from git.exc import GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError

    message = str(exc)
    # Prefer stderr so paths in the command line cannot affect classification
    lowered = str(getattr(exc, 'stderr', None) or message).lower()

    if isinstance(exc, (InvalidGitRepositoryError, NoSuchPathError)) or 'not a git repository' in lowered:
        return LastChangeInfo.failed(HistoryFailure.NOT_A_REPOSITORY)
    if isinstance(exc, GitCommandNotFound) or 'command not found' in lowered:
        return LastChangeInfo.failed(HistoryFailure.TOOL_NOT_INSTALLED)
    if isinstance(exc, subprocess.TimeoutExpired) or 'timeout' in lowered or 'timed out' in lowered:
        return LastChangeInfo.failed(HistoryFailure.TIMEOUT)
    return LastChangeInfo.failed(HistoryFailure.UNKNOWN_ERROR, message)


class HistoryResolver:
    """Looks up the most recent commit touching a file.

    Every failure path resolves to a LastChangeInfo; nothing is raised, so a
    report can always be rendered without version control.
    """

    def __init__(self, config: Optional[ScanConfiguration] = None):
        self.config = config or ScanConfiguration()

    def last_change(self, file_path) -> LastChangeInfo:
        """Return the last author/date of file_path, or the reason it is unknown."""
        file_path = Path(file_path).resolve()
        repo_root = find_repository_root(file_path.parent)
        if repo_root is None:
            return LastChangeInfo.failed(HistoryFailure.NOT_A_REPOSITORY)

        try:
            # GitPython refuses to load when no git executable can be found
            import git
        except ImportError as exc:
            logger.debug("GitPython could not be loaded: %s", exc)
            return LastChangeInfo.failed(HistoryFailure.TOOL_NOT_INSTALLED)

        try:
            repo = git.Repo(repo_root)
        except Exception as exc:
            logger.debug("Could not open repository at %s: %s", repo_root, exc)
            return classify_failure(exc)

        try:
            return self._query(repo, file_path)
        except Exception as exc:
            logger.debug("History lookup failed for %s: %s", file_path, exc)
            return classify_failure(exc)
        finally:
            repo.close()

    def _query(self, repo: 'git.Repo', file_path: Path) -> LastChangeInfo:
        from git.exc import GitCommandError

        last_error = None
        answered = False

        for variant in LOG_VARIANTS:
            try:
                raw = repo.git.log('-1', *variant, '--', str(file_path),
                                   kill_after_timeout=self.config.git_timeout)
            except GitCommandError as exc:
                logger.debug("git log %s failed: %s", ' '.join(variant), exc)
                last_error = exc
                continue

            answered = True
            raw = raw.strip()
            if not raw:
                continue

            author, _, date = raw.partition('|')
            return LastChangeInfo(
                author=author.strip(),
                timestamp=parse_git_date(date),
                raw_timestamp=date.strip() or None,
            )

        if not answered and last_error is not None:
            # Every variant failed; give up unless the failure just means "no history"
            failure = classify_failure(last_error)
            if failure.failure in (HistoryFailure.TIMEOUT, HistoryFailure.NOT_A_REPOSITORY):
                return failure

        author = self._configured_user(repo)
        if author:
            return LastChangeInfo(author=author, repository_wide=True)

        return LastChangeInfo.failed(HistoryFailure.NO_COMMITS)

    def _configured_user(self, repo: 'git.Repo') -> Optional[str]:
        """The locally configured user.name, used as a weak substitute author."""
        try:
            with repo.config_reader() as reader:
                name = reader.get_value('user', 'name', default='')
        except Exception as exc:
            logger.debug("Could not read git user.name: %s", exc)
            return None
        name = str(name).strip()
        return name or None
