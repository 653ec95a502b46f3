"""Service settings.

All configuration is read from the environment with the GRC_ADVISOR_ prefix,
e.g. ``GRC_ADVISOR_OLLAMA_BASE_URL=http://ollama:11434``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for grc-maturity-advisor.

    Environment variable prefix: GRC_ADVISOR_
    """

    service_name: str = "grc-maturity-advisor"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Ollama text generation
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"
    ollama_timeout_seconds: float = 60.0
    ollama_top_p: float = 0.9

    # Risk register
    risk_register_size: int = 12

    # Report generation
    fallback_recommendation_limit: int = 10
    include_benchmarks: bool = True

    model_config = SettingsConfigDict(env_prefix="GRC_ADVISOR_")
