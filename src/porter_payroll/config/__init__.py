import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "porter_payroll.config.production"

    if env in {"test", "testing"}:
        return "porter_payroll.config.testing"

    return "porter_payroll.config.development"
