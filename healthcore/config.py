from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/healthcore"
    engine_api_key: str | None = None
    log_level: str = "INFO"

    # Display locale used to resolve localized catalog text.
    default_locale: str = "en"

    # Fallback goals when the user has not stored their own.
    default_step_goal: int = 10000
    default_calorie_goal: int = 2000

    # Days of history (ending today) handed to the achievement evaluator.
    history_days: int = 7

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
