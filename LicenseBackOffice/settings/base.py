"""
Base Django settings for LicenseBackOffice.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-7q!m0v$k2c^lp9x@w3n#e8r(t)z_b5f&h1j+d6s-a4u*g"
)

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "LicenseBackOffice.apps.LicenseBackOfficeConfig",
    "core",
    "accounts",
    "customers",
    "products",
    "subscriptions",
    "licenses",
    "sales",
    "payments",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.identity.IdentityMiddleware",
    "core.middleware.observability.ObservabilityMiddleware",
]

ROOT_URLCONF = "LicenseBackOffice.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "license_back_office"),
        "USER": os.environ.get("DB_USER", "postgres"),
        "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 6},
    },
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [],
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Back Office API",
    "DESCRIPTION": (
        "Back-office API for a software-licensing business: staff accounts, "
        "customers, subscriptions, licenses and sales, kept in step with the "
        "payment provider's webhook events."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "Auth", "description": "Sessions and customer sign-up"},
        {"name": "Staff", "description": "Staff account management"},
        {"name": "Subscriptions", "description": "Checkout and trials"},
        {"name": "Licenses", "description": "Revocation and seat activation"},
        {"name": "Sales", "description": "Payment recording"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Record store: every repository reaches persisted state through it
RECORD_STORE = {
    "BACKEND": "core.infrastructure.django_store.DjangoRecordStore",
    "OPTIONS": {
        "collections": {
            "customers": "customers.Customer",
            "subscriptions": "subscriptions.Subscription",
            "licenses": "licenses.License",
            "sales": "sales.Sale",
            "products": "products.Product",
            "profiles": "accounts.Profile",
            "payment_events": "payments.ProcessedPaymentEvent",
        },
        "procedures": {
            "process_payment": "sales.infrastructure.procedures.process_payment",
        },
    },
}

# Payment provider events
PAYMENT_EVENTS = {
    "WEBHOOK_SECRET": os.environ.get("PAYMENT_WEBHOOK_SECRET", ""),
    "SIGNATURE_TOLERANCE_SECONDS": int(os.environ.get("PAYMENT_SIGNATURE_TOLERANCE", "300")),
    "DEDUPLICATE": os.environ.get("PAYMENT_EVENT_DEDUP", "false").lower() in ("1", "true", "yes"),
    "DEFAULT_CURRENCY": "EUR",
}

# Licenses
LICENSES = {
    "KEY_PREFIX": os.environ.get("LICENSE_KEY_PREFIX", "LIC"),
}

# Identity
IDENTITY = {
    "MIN_PASSWORD_LENGTH": 6,
}

# Observability
LOGGING = get_logging_config(os.environ.get("DJANGO_ENV", "development"))
