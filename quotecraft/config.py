from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "quotecraft"
    LOG_LEVEL: str = "INFO"
    CURRENCY_SYMBOL: str = "$"

    # New-quote defaults - read by the command layer only, never by the pricing engine
    DEFAULT_COMPLEXITY_PCT: float = 0.0
    DEFAULT_MARKUP_PCT: float = 10.0
    DEFAULT_TAX_PCT: float = 0.0
    DEFAULT_TASK_PRICE: float = 50.00
    DEFAULT_MATERIAL_PRICE: float = 100.00

    class Config:
        env_file = ".env"


settings = Settings()
