"""TOML configuration loader for the fridge module."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class ClaudeVisionConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiVisionConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class OpenAIVisionConfig:
    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"


@dataclass
class VisionConfig:
    backend: str = "openai"
    claude: ClaudeVisionConfig = field(default_factory=ClaudeVisionConfig)
    gemini: GeminiVisionConfig = field(default_factory=GeminiVisionConfig)
    openai: OpenAIVisionConfig = field(default_factory=OpenAIVisionConfig)


@dataclass
class PexelsConfig:
    api_key: str = ""
    enabled: bool = True


@dataclass
class DatabaseConfig:
    path: str = "~/.config/cookly/fridge.db"


@dataclass
class RecipesConfig:
    max_recipes: int = 5
    mode: str = "both"


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class FridgeConfig:
    vision: VisionConfig = field(default_factory=VisionConfig)
    pexels: PexelsConfig = field(default_factory=PexelsConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    recipes: RecipesConfig = field(default_factory=RecipesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> FridgeConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys left empty in the file are read from environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    vis = raw.get("vision", {})
    pex = raw.get("pexels", {})
    dbs = raw.get("database", {})
    rcp = raw.get("recipes", {})
    log = raw.get("logging", {})

    claude_cfg = vis.get("claude", {})
    gemini_cfg = vis.get("gemini", {})
    openai_cfg = vis.get("openai", {})

    # config file → environment variable
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )
    openai_api_key = openai_cfg.get("api_key", "") or os.environ.get(
        "OPENAI_API_KEY", ""
    )
    pexels_api_key = pex.get("api_key", "") or os.environ.get("PEXELS_API_KEY", "")

    return FridgeConfig(
        vision=VisionConfig(
            backend=vis.get("backend", "openai"),
            claude=ClaudeVisionConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiVisionConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
            openai=OpenAIVisionConfig(
                api_key=openai_api_key,
                model=openai_cfg.get("model", "gpt-4o-mini"),
                base_url=openai_cfg.get("base_url", "https://api.openai.com/v1"),
            ),
        ),
        pexels=PexelsConfig(
            api_key=pexels_api_key,
            enabled=pex.get("enabled", True),
        ),
        database=DatabaseConfig(
            path=dbs.get("path", "~/.config/cookly/fridge.db"),
        ),
        recipes=RecipesConfig(
            max_recipes=rcp.get("max_recipes", 5),
            mode=rcp.get("mode", "both"),
        ),
        logging=LoggingConfig(
            level=log.get("level", "INFO"),
        ),
    )
