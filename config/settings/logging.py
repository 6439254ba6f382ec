"""
Logging configuration.

Everything goes to stdout; the process manager / container runtime ships it.
Gym apps log under their package names (membership, payments, ...).
"""
import environ

env = environ.Env()

LOG_LEVEL = env("DJANGO_LOG_LEVEL", default="INFO")
GYM_LOG_LEVEL = env("GYM_LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "django": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "accounts": {"handlers": ["console"], "level": GYM_LOG_LEVEL, "propagate": False},
        "membership": {"handlers": ["console"], "level": GYM_LOG_LEVEL, "propagate": False},
        "payments": {"handlers": ["console"], "level": GYM_LOG_LEVEL, "propagate": False},
        "activities": {"handlers": ["console"], "level": GYM_LOG_LEVEL, "propagate": False},
        "config": {"handlers": ["console"], "level": GYM_LOG_LEVEL, "propagate": False},
    },
}
