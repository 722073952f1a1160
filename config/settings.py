"""Django settings for the festival registration service.

Values come from the environment; the defaults are for local development.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() == "true"
ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "festival",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("FESTIVAL_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("FESTIVAL_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("FESTIVAL_DB_USER", ""),
        "PASSWORD": os.environ.get("FESTIVAL_DB_PASSWORD", ""),
        "HOST": os.environ.get("FESTIVAL_DB_HOST", ""),
        "PORT": os.environ.get("FESTIVAL_DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
}

FESTIVAL = {
    "INCLUDED_WORKSHOP_LIMIT": int(os.environ.get("FESTIVAL_INCLUDED_WORKSHOPS", "6")),
    "ENFORCE_CAPACITY": {
        "workshop": False,
        "social": False,
        "table": True,
    },
    "CURRENCY": os.environ.get("FESTIVAL_CURRENCY", "aed"),
    "QUOTE_GALA_PRICE": os.environ.get("FESTIVAL_QUOTE_GALA_PRICE", "200.00"),
    "STORE_BACKEND": "festival.stores.django_store.DjangoFestivalStore",
    "PAYMENT_GATEWAY": "festival.payments.StripePaymentGateway",
    "STRIPE_SECRET_KEY": os.environ.get("STRIPE_SECRET_KEY", ""),
    "OCCUPANCY_CAS_RETRIES": 3,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "festival.logs.FestivalJsonFormatter",
            "fmt": "%(timestamp)s %(level)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("FESTIVAL_LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "django.request": {"level": "WARNING"},
    },
}
