from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "HASHER_"}

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    drain_timeout: float | None = None


settings = Settings()
