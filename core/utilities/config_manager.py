# core/utilities/config_manager.py
import json
import logging
from config import PathConfig, UcdConfig

class ConfigManager:
    LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')

    DEFAULT_SETTINGS = {
        'ucd_base_url': UcdConfig.BASE_URL,
        'log_level': 'WARNING',
        'show_progress': True
    }

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.load()
        return cls._instance

    def load(self):
        self.config_path = PathConfig.get_config_path()
        try:
            if self.config_path.exists():
                with open(self.config_path, 'r') as f:
                    self.settings = json.load(f)
                if not isinstance(self.settings, dict):
                    raise ValueError("config.json must hold an object")

                # Ensure new settings exist
                for key, default in self.DEFAULT_SETTINGS.items():
                    if key not in self.settings:
                        self.settings[key] = default
            else:
                self.settings = self.DEFAULT_SETTINGS.copy()
        except (OSError, ValueError) as e:
            logging.getLogger(__name__).warning(
                f"Ignoring unreadable {self.config_path}: {e}"
            )
            self.settings = self.DEFAULT_SETTINGS.copy()

    def save(self):
        with open(self.config_path, 'w') as f:
            json.dump(self.settings, f, indent=2)

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def set(self, key, value):
        self.settings[key] = value
        self.save()

    def get_ucd_base_url(self) -> str:
        return self.get('ucd_base_url', UcdConfig.BASE_URL)

    def set_ucd_base_url(self, value: str):
        if not value.startswith(('http://', 'https://', 'file://')):
            raise ValueError(f"Invalid UCD base URL: {value}")
        self.set('ucd_base_url', value)

    def get_log_level(self) -> str:
        level = str(self.get('log_level', 'WARNING')).upper()
        return level if level in self.LOG_LEVELS else 'WARNING'

    def set_log_level(self, value: str):
        level = str(value).upper()
        if level not in self.LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        self.set('log_level', level)

    def get_show_progress(self) -> bool:
        return bool(self.get('show_progress', True))

    def set_show_progress(self, value):
        self.set('show_progress', bool(value))

# Singleton access
config_manager = ConfigManager()
