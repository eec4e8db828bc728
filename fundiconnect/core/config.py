from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Any OpenAI-compatible endpoint; set OPENAI_BASE_URL=https://api.groq.com/openai/v1 for Groq.
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    OPENAI_MODEL_CLASSIFY: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_CLASSIFY: float = 0.0

    TELEGRAM_BOT_TOKEN: str | None = None
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_WEBHOOK_SECRET: str | None = None

    WHATSAPP_ACCESS_TOKEN: str | None = None
    WHATSAPP_PHONE_NUMBER_ID: str | None = None
    WHATSAPP_VERIFY_TOKEN: str = ""
    WHATSAPP_APP_SECRET: str | None = None
    WHATSAPP_GRAPH_API_VERSION: str = "v20.0"

    BUSINESS_NAME: str = "FundiConnect"
    WEBSITE_URL: str = "https://fundiconnect.com"
    SUPPORT_URL: str = "https://wa.me/254700000000"
    CURRENCY: str = "KSh"

    CATEGORY_POLICY: str = "best_match"
    KEYWORD_WORD_START: bool = False
    RANKED_MATCHING: bool = True
    MAX_MATCHES: int = 3
    QUOTE_RANDOM_SEED: int | None = None
    PROVIDERS_FILE: str | None = None

    SESSION_STORE: str = "memory"
    SESSION_DATA_DIR: str = "./data/sessions"

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    AUTO_REPLY_ENABLED: bool = False


settings = Settings()
