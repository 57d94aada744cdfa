"""URL routing based on source application and domain."""

import logging

from clutch.models.launch import LaunchOptions, SourceApp
from clutch.models.matchers import url_host
from clutch.models.routes import Rule, RoutingConfig

logger = logging.getLogger(__name__)


class RuleEngine:
    """Picks the target for a URL from a fixed routing configuration.

    Rules are sorted once by priority, highest first. Equal priorities keep
    the order they had in the configuration. The first matching rule wins.
    """

    def __init__(self, config: RoutingConfig):
        self._default_target = config.default_target
        self._rules: tuple[Rule, ...] = tuple(sorted(config.rules, key=lambda rule: -rule.priority))

        for rule in self._rules:
            if not rule.is_eligible:
                logger.warning(f"Rule '{rule.id}' has no source or domain matcher and will never apply")
                continue
            # Warms the regex cache.
            if rule.source is not None and rule.source.pattern is not None and rule.source.regex is None:
                logger.warning(f"Rule '{rule.id}' has an invalid source pattern and will never apply")
            if rule.domain is not None and rule.domain.wildcard is not None and rule.domain.regex is None:
                logger.warning(f"Rule '{rule.id}' has an invalid domain pattern and will never apply")

        logger.info(f"Rule engine initialized with {len(self._rules)} rule(s)")

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in evaluation order."""
        return self._rules

    @property
    def default_target(self) -> str:
        return self._default_target

    def resolve(self, url: str, source_app: SourceApp | None = None) -> LaunchOptions:
        """Find launch options for a URL opened by source_app (None if unknown)."""
        host = url_host(url)

        for rule in self._rules:
            if rule.matches(host, source_app):
                logger.debug(f"Rule '{rule.id}' matched")
                return LaunchOptions.from_rule(rule)

        logger.debug("No matching rule, using default target")
        return LaunchOptions.default(self._default_target)
