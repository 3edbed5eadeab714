from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    supabase_url: str
    supabase_service_role_key: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60
    session_cookie_name: str = "adops_session"
    session_cookie_secure: bool = True
    session_status_recheck: bool = False  # re-apply status gates on every guarded request
    bcrypt_rounds: int = 12
    cors_allow_origins: list[str] = ["http://localhost:3000"]
    database_url: str | None = None  # only used by scripts/

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
