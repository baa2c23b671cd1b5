from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    test_database_url: str = "sqlite+aiosqlite:///./test-blog.db"

    host: str = "0.0.0.0"
    port: int = 8080

    log_level: str = "INFO"
    db_echo: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
