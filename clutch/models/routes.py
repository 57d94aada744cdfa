"""Routing configuration models."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from clutch.models.launch import SourceApp
from clutch.models.matchers import DomainMatcher, SourceMatcher


class Rule(BaseModel):
    """Single routing rule."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    priority: int = Field(description="Higher values are evaluated first")
    source: SourceMatcher | None = None
    domain: DomainMatcher | None = None
    target: str = Field(
        validation_alias=AliasChoices("browser", "target"),
        serialization_alias="browser",
    )
    is_private: bool = Field(default=False, alias="private")
    new_window: bool = False

    @field_validator("is_private", "new_window", mode="before")
    @classmethod
    def _null_flag_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def is_eligible(self) -> bool:
        """A rule without any matcher can never apply."""
        return self.source is not None or self.domain is not None

    def matches(self, host: str | None, source_app: SourceApp | None) -> bool:
        if not self.is_eligible:
            return False
        if self.source is not None:
            if source_app is None:
                return False
            if not self.source.evaluate(source_app.name, source_app.bundle_id):
                return False
        if self.domain is not None:
            if host is None or not self.domain.matches_host(host):
                return False
        return True


class RoutingConfig(BaseModel):
    """Complete routing configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: int = 1
    default_target: str = Field(
        validation_alias=AliasChoices("defaultBrowser", "defaultTarget", "default_target"),
        serialization_alias="defaultBrowser",
    )
    rules: tuple[Rule, ...] = ()
