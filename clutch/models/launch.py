"""Inputs and outputs of a routing decision."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from clutch.models.routes import Rule


class SourceApp(BaseModel):
    """The application that asked for a URL to be opened."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name, e.g. Slack")
    bundle_id: str = Field(description="Stable identifier, e.g. com.tinyspeck.slackmacgap")


class LaunchOptions(BaseModel):
    """Which target to launch and how."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target: str
    is_private: bool = Field(default=False, alias="private")
    new_window: bool = False

    @classmethod
    def from_rule(cls, rule: "Rule") -> "LaunchOptions":
        return cls(target=rule.target, is_private=rule.is_private, new_window=rule.new_window)

    @classmethod
    def default(cls, target: str) -> "LaunchOptions":
        return cls(target=target)
