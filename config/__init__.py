"""Settings selection. APP_ENV names one of the modules in this package."""
from __future__ import annotations

import importlib
import os
from types import ModuleType
from typing import Optional

DEFAULT_ENV = "development"

SETTINGS_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module(env: Optional[str] = None) -> str:
    name = (env or os.getenv("APP_ENV") or DEFAULT_ENV).strip().lower()
    return SETTINGS_MODULES.get(name, SETTINGS_MODULES[DEFAULT_ENV])


def load_settings(env: Optional[str] = None) -> ModuleType:
    return importlib.import_module(get_settings_module(env))
