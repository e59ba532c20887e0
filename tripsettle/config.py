"""
Configuration for the settlement API, read from the environment.
"""
import os


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


class Config:
    # Decimal places of emitted transfer amounts: 0 for whole-unit currencies, 2 otherwise
    PRECISION = _env_int("TRIPSETTLE_PRECISION", 0)
    LOCALE = os.environ.get("TRIPSETTLE_LOCALE", "en-US")
    CORS_ORIGINS = os.environ.get("TRIPSETTLE_CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("TRIPSETTLE_LOG_LEVEL", "INFO")


def logging_config(level="INFO"):
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {
                'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
                'style': '{',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'verbose',
            },
        },
        'root': {
            'handlers': ['console'],
            'level': level,
        },
        'loggers': {
            'tripsettle': {
                'handlers': ['console'],
                'level': level,
                'propagate': False,
            },
        },
    }
