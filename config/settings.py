from pydantic import Field
from pydantic_settings import BaseSettings


class BotSettings(BaseSettings):
    discord_token: str = Field(..., description="Discord bot token")

    bot_prefix: str = Field(default="!", description="Default command prefix")
    guild_prefixes: dict[int, str] = Field(
        default_factory=dict,
        description="Per-guild prefixes, e.g. GUILD_PREFIXES='{\"1234\": \"?\"}'",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    # Plugin configuration
    enabled_plugins: list[str] = Field(
        default_factory=list,
        description="Plugins to load; empty loads every discovered plugin",
    )
    plugin_directories: list[str] = Field(
        default=["plugins"],
        description="Directories to scan for plugins",
    )

    # Seconds before alert responses (e.g. cooldown notices) are deleted
    alert_timeout: float = Field(default=10, description="Alert response lifetime in seconds")
    report_errors_to_user: bool = Field(default=True, description="Reply with a notice when a command fails")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = BotSettings()
