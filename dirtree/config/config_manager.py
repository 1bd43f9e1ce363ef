"""Configuration management for dirtree."""

import copy
import os
import yaml
from typing import Dict, Any, Optional
from .config_validator import ConfigValidator


class ConfigManager:
    """Loads the optional YAML configuration and fills in defaults."""
    
    DEFAULT_CONFIG_LOCATIONS = [
        "dirtree.yaml",
        "dirtree.yml",
        os.path.expanduser("~/.dirtree/config.yaml"),
        os.path.expanduser("~/.dirtree/config.yml"),
    ]

    DEFAULTS = {
        'traversal': {
            'max_paths': 64,
            'max_depth': None,
            'on_error': 'ignore'
        },
        'logging': {
            'level': 'WARNING',
            'file': None
        },
        'output': {
            'name_width': 54
        }
    }
    
    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.
        
        Args:
            config_path: Optional path to config file. If not provided,
                        the default locations are searched and built-in
                        defaults are used when none exists.
        """
        self.config_path = config_path
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()
        
    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file.
        
        Returns:
            Dictionary containing configuration data.
            
        Raises:
            FileNotFoundError: If an explicit config file does not exist.
            ValueError: If config file is invalid.
        """
        config_file = self._find_config_file()
        self.config_data = {}
        
        if config_file:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    self.config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in config file {config_file}: {e}")
            except OSError as e:
                raise ValueError(f"Error reading config file {config_file}: {e}")
        
        # Validate configuration
        self.validator.validate(self.config_data)
        
        # Set defaults
        self._set_defaults()
        
        return self.config_data
    
    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in default locations.
        
        Returns:
            Path to configuration file, or None if there is none.
            
        Raises:
            FileNotFoundError: If the explicit config path does not exist.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            else:
                raise FileNotFoundError(f"Config file not found: {self.config_path}")
        
        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location
        
        return None
    
    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        for section, section_defaults in copy.deepcopy(self.DEFAULTS).items():
            if not self.config_data.get(section):
                self.config_data[section] = {}
            for key, value in section_defaults.items():
                if key not in self.config_data[section]:
                    self.config_data[section][key] = value
    
    def get_traversal_config(self) -> Dict[str, Any]:
        """Get traversal configuration.
        
        Returns:
            Traversal configuration dictionary.
        """
        return self.config_data.get('traversal', {})
    
    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.
        
        Returns:
            Logging configuration dictionary.
        """
        return self.config_data.get('logging', {})
    
    def get_output_config(self) -> Dict[str, Any]:
        """Get output configuration.
        
        Returns:
            Output configuration dictionary.
        """
        return self.config_data.get('output', {})
