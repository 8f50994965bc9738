from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Gallery Field Bridge"
    app_version: str = "1.0.0"
    debug: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = True

    # Field discovery
    gallery_field_type: str = "galerie-4"

    # Published attribute shape
    attribute_suffix: str = "_gallery"
    label_suffix: str = " (Galerie)"
    metadata_group: str = "ACF Galerie 4"
    attachment_type: str = "Attachment"

    # Post types whose schema name is not a plain PascalCase conversion
    builtin_type_map: dict[str, str] = {"post": "Post", "page": "Page"}

    # Runs after the host's own field integration (priority -10)
    listener_priority: int = 10

    plugins_config_file: str = "data/plugins_config.json"

    model_config = SettingsConfigDict(
        env_prefix="GALLERY_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
