import os
from dotenv import load_dotenv

load_dotenv(override=True)


def split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    """
    Base configuration for the Ethereum signup module.
    Projects should provide database paths via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    SETTINGS_DB = os.getenv('SETTINGS_DB', os.path.join(DB_DIR, 'settings.db'))
    USER_DB = os.getenv('USER_DB', os.path.join(DB_DIR, 'users.db'))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, 'app_logs.db'))

    # Where admin_required sends anonymous visitors
    ADMIN_LOGIN_URL = os.getenv('ADMIN_LOGIN_URL', '/admin/login')

    # Origins allowed to fetch the public signup config (comma separated)
    ETHEREUM_SIGNUP_ALLOWED_ORIGINS = split_origins(
        os.getenv('ETHEREUM_SIGNUP_ALLOWED_ORIGINS', 'http://localhost:3000,http://localhost:5000')
    )


def get_config_value(key, default=None):
    """Resolve a config value (3-tier pattern): app config, Config class, environment"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        # Outside of application context
        pass

    val = getattr(Config, key, None)
    if val is not None:
        return val

    return os.getenv(key, default)
