from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from domain.aopenai import DEFAULT_BASE_URL, DEFAULT_MODEL, TIMEOUT


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    gateway_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("lovable_api_key", "gateway_api_key"),
    )
    gateway_url: str = DEFAULT_BASE_URL
    core_model: str = DEFAULT_MODEL
    request_timeout: float = TIMEOUT
    multi_agent: bool = True
    sse_done_sentinel: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
