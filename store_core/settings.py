import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("GIT_STORE_SECRET_KEY", "insecure-dev-key")
DEBUG = os.environ.get("GIT_STORE_DEBUG", "") == "1"
ALLOWED_HOSTS = os.environ.get("GIT_STORE_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "git_store",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
]

ROOT_URLCONF = "store_core.urls"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("GIT_STORE_DB_PATH", str(BASE_DIR / "git_store.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True

# Short name; the default branch of a new repository is refs/heads/<this>.
GIT_STORE_DEFAULT_BRANCH = os.environ.get("GIT_STORE_DEFAULT_BRANCH", "main")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "git_store": {
            "handlers": ["console"],
            "level": os.environ.get("GIT_STORE_LOG_LEVEL", "INFO"),
        },
    },
}
