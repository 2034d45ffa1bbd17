"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (QUARTZ_AI_PROVIDER, QUARTZ_AI_MODEL, QUARTZ_LANGUAGE)
  2. Project config (.quartz/config.yaml)
  3. User config (~/.quartz/config.yaml)
  4. Defaults

API keys and platform tokens are NEVER stored in config files.
They must be provided via environment variables.

Profiles are named snapshots of the effective configuration, kept in
profiles.yaml beside the config file of their scope. Loading a profile
writes it back into that config file.
"""

import os
import re
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .presentation.symbols import get_symbols


# Supported providers and their defaults
PROVIDERS = {
    "openai": {
        "env_key": "OPENAI_API_KEY",
        "base_url": None,
        "default_model": "gpt-4o-mini",
        "models": [
            "gpt-4.1",
            "gpt-4o",
            "gpt-4o-mini",
            "gpt-4.1-mini",
            "o4-mini",
        ]
    },
    "deepseek": {
        "env_key": "DEEPSEEK_API_KEY",
        "base_url": "https://api.deepseek.com",
        "default_model": "deepseek-chat",
        "models": [
            "deepseek-chat",
            "deepseek-reasoner",
        ]
    },
}

DEFAULT_PROVIDER = "openai"

# Hosting platforms and the variable holding their token
PLATFORMS = {
    "github": {"token_env": "GITHUB_TOKEN", "default_url": "https://github.com"},
    "gitlab": {"token_env": "GITLAB_TOKEN", "default_url": "https://gitlab.com"},
}

LANGUAGES = ("en", "zh")
SYMBOL_MODES = ("unicode", "ascii", "auto")
PROFILE_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class AIConfig:
    """AI provider configuration."""
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None  # None = use provider default
    base_url: Optional[str] = None  # None = provider default endpoint

    @property
    def effective_model(self) -> str:
        """Get model, falling back to provider default."""
        if self.model:
            return self.model
        return PROVIDERS.get(self.provider, {}).get("default_model", "")

    @property
    def effective_base_url(self) -> Optional[str]:
        return self.base_url or PROVIDERS.get(self.provider, {}).get("base_url")

    @property
    def api_key_env(self) -> str:
        """Environment variable name for the API key."""
        return PROVIDERS.get(self.provider, {}).get("env_key", "")

    @property
    def api_key(self) -> Optional[str]:
        """Get API key from environment. Never stored."""
        if not self.api_key_env:
            return None
        return os.environ.get(self.api_key_env)

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.provider not in PROVIDERS:
            valid = ", ".join(PROVIDERS.keys())
            return f"Unknown provider '{self.provider}'. Valid: {valid}"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    language: str = "en"   # "en" | "zh"

    def validate(self) -> Optional[str]:
        if self.symbols not in SYMBOL_MODES:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(SYMBOL_MODES)}"
        if self.language not in LANGUAGES:
            return f"Unknown language '{self.language}'. Valid: {', '.join(LANGUAGES)}"
        return None


@dataclass
class PlatformConfig:
    """A registered code-hosting platform."""
    type: str
    url: Optional[str] = None

    @property
    def effective_url(self) -> str:
        return self.url or PLATFORMS.get(self.type, {}).get("default_url", "")

    @property
    def token_env(self) -> str:
        return PLATFORMS.get(self.type, {}).get("token_env", "")

    @property
    def token(self) -> Optional[str]:
        """Get token from environment. Never stored."""
        if not self.token_env:
            return None
        return os.environ.get(self.token_env)

    def validate(self) -> Optional[str]:
        if self.type not in PLATFORMS:
            return f"Unknown platform '{self.type}'. Valid: {', '.join(PLATFORMS)}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.url:
            data["url"] = self.url
        return data


@dataclass
class Config:
    """Application configuration."""
    ai: AIConfig = field(default_factory=AIConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    platforms: List[PlatformConfig] = field(default_factory=list)

    def find_platform(self, platform_type: str) -> Optional[PlatformConfig]:
        for platform in self.platforms:
            if platform.type == platform_type:
                return platform
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "ai": {
                "provider": self.ai.provider,
                "model": self.ai.model,
                "base_url": self.ai.base_url,
            },
            "display": {
                "symbols": self.display.symbols,
                "language": self.display.language,
            },
            "platforms": [p.to_dict() for p in self.platforms],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        ai_data = data.get("ai") or {}
        display_data = data.get("display") or {}
        platforms_data = data.get("platforms") or []

        return cls(
            ai=AIConfig(
                provider=ai_data.get("provider") or DEFAULT_PROVIDER,
                model=ai_data.get("model"),
                base_url=ai_data.get("base_url"),
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                language=display_data.get("language", "en"),
            ),
            platforms=[
                PlatformConfig(type=p["type"], url=p.get("url"))
                for p in platforms_data
                if isinstance(p, dict) and p.get("type")
            ],
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment overrides
      2. Project config (.quartz/config.yaml)
      3. User config (~/.quartz/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".quartz"
    PROJECT_CONFIG_DIR = ".quartz"
    CONFIG_FILE = "config.yaml"
    PROFILES_FILE = "profiles.yaml"

    SETTINGS = {
        "ai": ("provider", "model", "base_url"),
        "display": ("symbols", "language"),
    }

    def __init__(self, project_dir: Optional[Path] = None, user_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.user_dir = Path(user_dir) if user_dir else self.USER_CONFIG_DIR
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.user_dir / self.CONFIG_FILE

    def path_for(self, scope: str) -> Path:
        return self.user_config_path if scope == "user" else self.project_config_path

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("QUARTZ_AI_PROVIDER"):
            config_data.setdefault("ai", {})["provider"] = os.environ["QUARTZ_AI_PROVIDER"]
        if os.environ.get("QUARTZ_AI_MODEL"):
            config_data.setdefault("ai", {})["model"] = os.environ["QUARTZ_AI_MODEL"]
        if os.environ.get("QUARTZ_LANGUAGE"):
            config_data.setdefault("display", {})["language"] = os.environ["QUARTZ_LANGUAGE"]

        self._config = Config.from_dict(config_data)
        return self._config

    def load_scope(self, scope: str) -> Config:
        """Load a single file (no layering), for read-modify-write."""
        return Config.from_dict(self._read(self.path_for(scope)))

    def reload(self) -> Config:
        self._config = None
        return self.load()

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self._write(self.project_config_path, config)

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self._write(self.user_config_path, config)

    def save(self, config: Config, scope: str = "project"):
        if scope == "user":
            self.save_user(config)
        else:
            self.save_project(config)

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "ai.model")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'ai.model')"

        section, setting = parts
        if section not in self.SETTINGS:
            return f"Unknown section: {section}. Valid: {', '.join(self.SETTINGS)}"
        if setting not in self.SETTINGS[section]:
            return f"Unknown {section} setting: {setting}. Valid: {', '.join(self.SETTINGS[section])}"

        config = self.load_scope(scope)
        target = config.ai if section == "ai" else config.display
        setattr(target, setting, value)

        error = target.validate()
        if error:
            return error

        self.save(config, scope)
        return None

    def get(self, key: str) -> Optional[str]:
        """Get an effective configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        if section == "ai":
            if setting == "provider":
                return config.ai.provider
            elif setting == "model":
                return config.ai.effective_model
            elif setting == "base_url":
                return config.ai.effective_base_url
        elif section == "display":
            if setting == "symbols":
                return config.display.symbols
            elif setting == "language":
                return config.display.language

        return None

    def add_platform(self, platform_type: str, url: Optional[str] = None,
                     scope: str = "project") -> Optional[str]:
        """
        Register a hosting platform, replacing one of the same type.

        Returns:
            Error message or None if successful
        """
        platform = PlatformConfig(type=platform_type, url=url)
        error = platform.validate()
        if error:
            return error

        config = self.load_scope(scope)
        config.platforms = [p for p in config.platforms if p.type != platform_type]
        config.platforms.append(platform)
        self.save(config, scope)
        return None

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    def profiles_path(self, scope: str = "project") -> Path:
        """Named snapshots live next to the config file of their scope."""
        return self.path_for(scope).parent / self.PROFILES_FILE

    def list_profiles(self, scope: str = "project") -> List[str]:
        return list(self._read_profiles(scope)["profiles"])

    def get_active_profile(self, scope: str = "project") -> Optional[str]:
        return self._read_profiles(scope)["active"]

    def read_profile(self, name: str, scope: str = "project") -> Optional[Config]:
        data = self._read_profiles(scope)["profiles"].get(name)
        if data is None:
            return None
        return Config.from_dict(data)

    def save_profile(self, name: str, scope: str = "project",
                     overwrite: bool = True) -> Optional[str]:
        """
        Snapshot the effective configuration under a name.

        Returns:
            Error message or None if successful
        """
        if not PROFILE_NAME.match(name):
            return f"Invalid profile name '{name}'. Use letters, digits, '.', '_' or '-'"

        store = self._read_profiles(scope)
        if name in store["profiles"] and not overwrite:
            return f"Profile '{name}' already exists"

        store["profiles"][name] = self.load().to_dict()
        self._write_profiles(scope, store)
        return None

    def load_profile(self, name: str, scope: str = "project") -> Optional[str]:
        """
        Write a saved profile into the scope's config file and mark it active.

        Returns:
            Error message or None if successful
        """
        store = self._read_profiles(scope)
        if name not in store["profiles"]:
            return self._missing_profile(name, store)

        self.save(Config.from_dict(store["profiles"][name]), scope)
        store["active"] = name
        self._write_profiles(scope, store)
        return None

    def delete_profile(self, name: str, scope: str = "project") -> Optional[str]:
        """
        Remove a saved profile. The config file itself is left as it is.

        Returns:
            Error message or None if successful
        """
        store = self._read_profiles(scope)
        if name not in store["profiles"]:
            return self._missing_profile(name, store)

        del store["profiles"][name]
        if store["active"] == name:
            store["active"] = None
        self._write_profiles(scope, store)
        return None

    def _missing_profile(self, name: str, store: Dict[str, Any]) -> str:
        available = ", ".join(store["profiles"]) or "(none)"
        return f"Profile '{name}' not found. Available: {available}"

    def _read_profiles(self, scope: str) -> Dict[str, Any]:
        data = self._read(self.profiles_path(scope))
        profiles = data.get("profiles")
        if not isinstance(profiles, dict):
            profiles = {}
        active = data.get("active")
        return {
            "active": active if active in profiles else None,
            "profiles": {k: v for k, v in profiles.items() if isinstance(v, dict)},
        }

    def _write_profiles(self, scope: str, store: Dict[str, Any]):
        path = self.profiles_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(store, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}  # Ignore malformed config
        return data if isinstance(data, dict) else {}

    def _write(self, path: Path, config: Config):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, allow_unicode=True)
        self._config = None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)

        api_key_status = f"{symbols.check_pass} Set" if config.ai.is_available else f"{symbols.check_fail} Missing"
        lines = [
            "Configuration:",
            "",
            "AI:",
            f"  Provider: {config.ai.provider}",
            f"  Model: {config.ai.effective_model}",
        ]
        if config.ai.effective_base_url:
            lines.append(f"  Endpoint: {config.ai.effective_base_url}")
        lines.append(f"  API Key: {api_key_status}")

        if not config.ai.is_available and config.ai.api_key_env:
            lines.append(f"  (Set {config.ai.api_key_env} environment variable)")

        lines.extend([
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            f"  Language: {config.display.language}",
            "",
            "Platforms:",
        ])

        if not config.platforms:
            lines.append("  (none)")
        for platform in config.platforms:
            token_status = symbols.check_pass if platform.token else symbols.check_fail
            lines.append(f"  {symbols.bullet} {platform.type} {platform.effective_url} (token {token_status})")

        lines.extend([
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
