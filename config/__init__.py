import os

_ENV_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
    "dev": "development",
    "development": "development",
}


def get_settings_module() -> str:
    # SCHEDULER_SETTINGS names a module outright; otherwise APP_ENV picks one
    explicit = os.getenv("SCHEDULER_SETTINGS")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ENV_ALIASES.get(env, 'development')}"
