# backend/panel_backend/settings.py
"""
Django settings for the Language Panel backend.
"""
from pathlib import Path
from decouple import Csv, config
import os
import sys

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Security settings
SECRET_KEY = config("DJANGO_SECRET_KEY", default="language-panel-insecure-dev-key")
DEBUG = config("DJANGO_DEBUG", default=True, cast=bool)  # Enable debug for local development
ALLOWED_HOSTS = config(
    "DJANGO_ALLOWED_HOSTS",
    default="127.0.0.1,localhost",
    cast=Csv(),
)

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "language_lines.apps.LanguageLinesConfig",
    "rest_framework",
    "corsheaders",
]

REST_FRAMEWORK = {
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAdminUser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
        'rest_framework.authentication.BasicAuthentication',
    ],
}

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "panel_backend.urls"

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

WSGI_APPLICATION = "panel_backend.wsgi.application"

# Database configuration (in-memory SQLite when running the test suite)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:" if "test" in sys.argv else BASE_DIR / "db.sqlite3",
    },
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Uploaded spreadsheets are processed straight from the request, never stored
FILE_UPLOAD_MAX_MEMORY_SIZE = config("DJANGO_FILE_UPLOAD_MAX_MEMORY_SIZE", default=10 * 1024 * 1024, cast=int)

# CORS settings
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS",
    default="http://localhost:3000,http://127.0.0.1:3000",
    cast=Csv(),
)

# Language panel: which admin affordances are enabled, which locales exist,
# and where the source translation files live.
LANGUAGE_PANEL = {
    "LOCALES": config("LANGUAGE_PANEL_LOCALES", default="en", cast=Csv()),
    "LANG_PATH": config("LANGUAGE_PANEL_LANG_PATH", default=os.path.join(BASE_DIR, "lang")),
    "resource": {
        "form": {
            "edit_form_group": config("LANGUAGE_PANEL_EDIT_FORM_GROUP", default=False, cast=bool),
            "edit_form_key": config("LANGUAGE_PANEL_EDIT_FORM_KEY", default=False, cast=bool),
            "edit_form_keyvalue": config("LANGUAGE_PANEL_EDIT_FORM_KEYVALUE", default=False, cast=bool),
            "add_form_keyvalue": config("LANGUAGE_PANEL_ADD_FORM_KEYVALUE", default=False, cast=bool),
            "delete_form_keyvalue": config("LANGUAGE_PANEL_DELETE_FORM_KEYVALUE", default=False, cast=bool),
        },
        "allow_delete": config("LANGUAGE_PANEL_ALLOW_DELETE", default=False, cast=bool),
    },
    "lang-import": {
        "allow_overwrite": config("LANGUAGE_PANEL_ALLOW_OVERWRITE", default=False, cast=bool),
        "allow_truncate": config("LANGUAGE_PANEL_ALLOW_TRUNCATE", default=False, cast=bool),
    },
    "excel": {
        "allow_export": config("LANGUAGE_PANEL_ALLOW_EXPORT", default=False, cast=bool),
        "allow_import": config("LANGUAGE_PANEL_ALLOW_IMPORT", default=False, cast=bool),
        "allow_all": config("LANGUAGE_PANEL_ALLOW_EXCEL", default=False, cast=bool),
    },
}
