"""
Django settings for dashboard project.

Values come from environment variables so the same build runs against any
order service deployment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-secret-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "orders",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "dashboard.urls"

WSGI_APPLICATION = "dashboard.wsgi.application"

# Orders live in the remote order service; nothing is persisted locally
DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"

# Remote order service
ORDERS_API_URL = os.environ.get("ORDERS_API_URL", "http://localhost:4000")
ORDERS_API_TOKEN = os.environ.get("ORDERS_API_TOKEN", "")
ORDERS_API_TIMEOUT = float(os.environ.get("ORDERS_API_TIMEOUT", "10"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "orders.utils.logging.JsonFormatter",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "loggers": {
        "orders": {
            "handlers": ["console"],
            "level": os.environ.get("ORDERS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
