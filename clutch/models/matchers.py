"""Source application and domain matchers."""

import logging
import re
from functools import lru_cache
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern[str] | None:
    """Compile a regex, returning None if it is malformed."""
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        logger.warning(f"Invalid pattern {pattern!r}: {e}")
        return None


def wildcard_to_regex(pattern: str) -> str:
    """Translate a host glob such as "*.github.com" to an anchored regex.

    Patterns starting with "^" are already regexes and are returned unchanged.
    """
    if pattern.startswith("^"):
        return pattern
    return "^" + ".*".join(re.escape(part) for part in pattern.split("*")) + "$"


def url_host(url: str) -> str | None:
    """Return the lowercased host of a URL, without port."""
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


class SourceMatcher(BaseModel):
    """Matches the application that asked for a URL to be opened."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    exact_name: str | None = Field(default=None, alias="name", description="Display name, case-sensitive")
    exact_identifier: str | None = Field(default=None, alias="bundle_id", description="Stable app identifier")
    pattern: str | None = Field(default=None, description="Regex searched in the display name")

    @property
    def regex(self) -> re.Pattern[str] | None:
        if self.pattern is None:
            return None
        return compile_pattern(self.pattern)

    def evaluate(self, app_name: str, app_identifier: str) -> bool:
        if self.exact_name is not None and self.exact_name == app_name:
            return True
        if self.exact_identifier is not None and self.exact_identifier == app_identifier:
            return True
        if self.pattern is not None:
            regex = self.regex
            return regex is not None and regex.search(app_name) is not None
        return False


class DomainMatcher(BaseModel):
    """Matches the host of the URL being opened. All comparisons ignore case."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    exact: str | None = Field(default=None, description="Host equality")
    wildcard: str | None = Field(default=None, alias="pattern", description="Host glob or ^-prefixed regex")
    contains: str | None = Field(default=None, description="Host substring")

    @property
    def regex(self) -> re.Pattern[str] | None:
        if self.wildcard is None:
            return None
        return compile_pattern(wildcard_to_regex(self.wildcard), re.IGNORECASE)

    def evaluate(self, url: str) -> bool:
        host = url_host(url)
        if host is None:
            return False
        return self.matches_host(host)

    def matches_host(self, host: str) -> bool:
        host = host.lower()
        if self.exact is not None:
            return self.exact.lower() == host
        if self.wildcard is not None:
            regex = self.regex
            return regex is not None and regex.search(host) is not None
        if self.contains is not None:
            return self.contains.lower() in host
        return False
