"""Configuration management for checkers."""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHECKERS_CONFIG"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_FORMAT_DETAILED = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_config_dir() -> Path:
    """Get the configuration directory."""
    # Use XDG on Linux/WSL, or fallback
    if os.name == 'nt':
        config_base = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
    else:
        config_base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return config_base / 'checkers'


def get_config_file() -> Path:
    """Get the configuration file path."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / 'settings.yaml'


@dataclass
class RuleSettings:
    """Game rule settings."""
    forced_capture: bool = True
    multi_jump: bool = True
    keep_selection_on_miss: bool = True  # Misclicks leave the current selection alone
    no_moves_loses: bool = True  # A side to move without a legal move loses

    def __post_init__(self):
        for name, value in asdict(self).items():
            if not isinstance(value, bool):
                raise TypeError(f"Rule {name!r} must be true or false, got {value!r}")


@dataclass
class GameSettings:
    """Game-related settings."""
    rules: RuleSettings = field(default_factory=RuleSettings)


@dataclass
class LoggingSettings:
    """Logging settings applied by hosts through ``configure_logging``."""
    level: str = "INFO"
    log_file: str = ""


@dataclass
class Config:
    """Main configuration class."""
    game: GameSettings = field(default_factory=GameSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'game': {
                'rules': asdict(self.game.rules),
            },
            'logging': asdict(self.logging),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        config = cls()

        if 'game' in data:
            game_data = data['game']
            if 'rules' in game_data:
                config.game.rules = RuleSettings(**game_data['rules'])

        if 'logging' in data:
            config.logging = LoggingSettings(**data['logging'])

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = get_config_file()

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from file, falling back to defaults."""
        if path is None:
            path = get_config_file()

        if not path.exists():
            return cls()

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
                if data is None:
                    return cls()
                return cls.from_dict(data)
        except (OSError, yaml.YAMLError, TypeError) as e:
            logger.warning("Failed to load config from %s: %s", path, e)
            return cls()


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Optional[Config]) -> None:
    """Replace the global configuration without touching the file.

    Passing None makes the next ``get_config`` reload from disk.
    """
    global _config
    _config = config


def save_config() -> None:
    """Save the global configuration."""
    global _config
    if _config is not None:
        _config.save()


def reset_config() -> Config:
    """Reset configuration to defaults."""
    global _config
    _config = Config()
    _config.save()
    return _config
