"""Application configuration for Mood Memories."""

from __future__ import annotations

import os
from typing import Dict, Type

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/moodmemories.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "true")
    ASSISTANT_RATE_LIMIT = os.environ.get("ASSISTANT_RATE_LIMIT", "30/minute")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Generative text service (Google Gemini). An empty key means the key is
    # taken from the local api_key slot or is unavailable.
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_API_BASE = os.environ.get(
        "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
    )
    TEXT_SERVICE_TIMEOUT_SECONDS = int(os.environ.get("TEXT_SERVICE_TIMEOUT_SECONDS", "30"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    RATELIMIT_ENABLED = False
    # Never pick up a developer's key from the environment in tests.
    GEMINI_API_KEY = ""


class ProductionConfig(BaseConfig):
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
