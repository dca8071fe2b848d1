"""
Configuration: process settings from the environment and brand rules loading.
"""
import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError

from brandguard.exceptions import RulesConfigError
from brandguard.models import BrandRules
from brandguard.services.sources import SOURCE_FIXTURE, SOURCE_LIVE

logger = structlog.get_logger()

DEFAULT_BRAND_RULES = BrandRules()


@dataclass(frozen=True)
class Settings:
    brand_rules_path: Optional[str]
    snapshot_source: str
    log_level: str
    host: str
    port: int
    cors_origins: str
    app_env: str

    @classmethod
    def from_env(cls) -> "Settings":
        source = os.getenv("SNAPSHOT_SOURCE", SOURCE_LIVE).lower()
        if source not in (SOURCE_LIVE, SOURCE_FIXTURE):
            raise ValueError(f"SNAPSHOT_SOURCE must be '{SOURCE_LIVE}' or '{SOURCE_FIXTURE}', got '{source}'")
        return cls(
            brand_rules_path=os.getenv("BRAND_RULES_PATH") or None,
            snapshot_source=source,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            cors_origins=os.getenv("CORS_ORIGINS", "*"),
            app_env=os.getenv("APP_ENV", "development"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def brand_rules_from_dict(data: Dict[str, Any]) -> BrandRules:
    """Validate a parsed rules document, applying every default once."""
    try:
        return BrandRules.model_validate(data)
    except ValidationError as e:
        raise RulesConfigError(
            "Brand rules failed validation",
            {"errors": e.errors(include_url=False)}
        ) from e


def load_brand_rules(path: Optional[str] = None) -> BrandRules:
    """
    Load brand rules from a JSON file.
    Without a path the built-in Enterprise Brand rules are returned.
    """
    if path is None:
        return DEFAULT_BRAND_RULES

    rules_path = Path(path)
    try:
        data = json.loads(rules_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RulesConfigError(f"Cannot read brand rules file {rules_path}", {"path": str(rules_path)}) from e
    except json.JSONDecodeError as e:
        raise RulesConfigError(
            f"Brand rules file {rules_path} is not valid JSON",
            {"path": str(rules_path), "line": e.lineno}
        ) from e

    if not isinstance(data, dict):
        raise RulesConfigError(f"Brand rules file {rules_path} must contain a JSON object", {"path": str(rules_path)})

    rules = brand_rules_from_dict(data)
    logger.info(
        "brand_rules_loaded",
        path=str(rules_path),
        brand=rules.brand_name,
        colors=len(rules.colors.approved),
        fonts=len(rules.fonts.approved)
    )
    return rules
