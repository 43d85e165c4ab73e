"""
Shared configuration management for the simple-acl decision engine.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RULE_CLASS = "simple_acl.rules.models.Rule"


class AclSettings(BaseSettings):
    """Engine settings, read from ``ACL_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ACL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="info")

    # Rule construction
    rule_class: str = Field(default=DEFAULT_RULE_CLASS)

    # Observability
    enable_metrics: bool = Field(default=True)
    metrics_namespace: str = Field(default="simple_acl")


def get_config(**overrides) -> AclSettings:
    """Get engine configuration, with explicit overrides taking precedence."""
    return AclSettings(**overrides)
