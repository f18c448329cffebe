from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # Database
    database_url: str = "sqlite:///./reservations.db"

    # App
    app_name: str = 'Tischreservierung'
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kapazität (Fallback wenn kein Restaurant zugeordnet ist)
    default_capacity: int = 50
    capacity_step: int = 5

    # Zeitslots für Reservierungen
    slot_start: str = "11:00"
    slot_end: str = "21:30"
    slot_interval_minutes: int = 30

    # Logging
    log_dir: str = "logs"

    # Mitternachts-Timer
    enable_day_scheduler: bool = True

    # User der beim Start angemeldet ist (optional)
    seed_user_email: str = ""


settings = Settings()
