import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown falls back to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "campus_attendance.settings.production"

    if env in {"test", "testing"}:
        return "campus_attendance.settings.testing"

    return "campus_attendance.settings.development"
