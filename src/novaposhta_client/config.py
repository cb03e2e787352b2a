"""Client configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "https://api.novaposhta.ua/v2.0/json/"
DEFAULT_PRINT_URL = "https://my.novaposhta.ua"


class NovaPoshtaConfig(BaseSettings):
    """Immutable runtime config for the carrier client."""

    model_config = SettingsConfigDict(env_prefix="NOVAPOSHTA_", frozen=True)

    api_key: str = Field(repr=False)
    endpoint: str = DEFAULT_ENDPOINT
    print_url: str = DEFAULT_PRINT_URL
    timeout: float = 30.0
