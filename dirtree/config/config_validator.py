"""Configuration validation for dirtree."""

from typing import Dict, Any


class ConfigValidator:
    """Validates dirtree configuration."""
    
    KNOWN_SECTIONS = ['traversal', 'logging', 'output']
    ERROR_POLICIES = ['ignore', 'warn', 'raise']
    LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
    MIN_NAME_WIDTH = 3
    
    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.
        
        Args:
            config: Configuration dictionary to validate.
            
        Raises:
            ValueError: If configuration is invalid.
        """
        self._validate_structure(config)
        self._validate_traversal(config.get('traversal') or {})
        self._validate_logging(config.get('logging') or {})
        self._validate_output(config.get('output') or {})
    
    def _validate_structure(self, config: Dict[str, Any]) -> None:
        """Validate basic configuration structure.
        
        Raises:
            ValueError: If the document or one of its sections is malformed.
        """
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")
        
        unknown_sections = [section for section in config if section not in self.KNOWN_SECTIONS]
        if unknown_sections:
            raise ValueError(f"Unknown configuration sections: {unknown_sections}")
        
        for section in self.KNOWN_SECTIONS:
            value = config.get(section)
            if value is not None and not isinstance(value, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")
    
    def _validate_traversal(self, traversal: Dict[str, Any]) -> None:
        """Validate traversal options.
        
        Raises:
            ValueError: If a traversal option is invalid.
        """
        if 'max_paths' in traversal:
            if not self._is_positive_int(traversal['max_paths']):
                raise ValueError(f"traversal.max_paths must be a positive integer: {traversal['max_paths']}")
        
        max_depth = traversal.get('max_depth')
        if max_depth is not None and not self._is_positive_int(max_depth):
            raise ValueError(f"traversal.max_depth must be a positive integer or null: {max_depth}")
        
        on_error = traversal.get('on_error', 'ignore')
        if on_error not in self.ERROR_POLICIES:
            raise ValueError(f"traversal.on_error has invalid value: {on_error}")
    
    def _validate_logging(self, logging_config: Dict[str, Any]) -> None:
        level = logging_config.get('level', 'WARNING')
        if not isinstance(level, str) or level.upper() not in self.LOG_LEVELS:
            raise ValueError(f"logging.level has invalid value: {level}")
        
        log_file = logging_config.get('file')
        if log_file is not None and not isinstance(log_file, str):
            raise ValueError("logging.file must be a path string")
    
    def _validate_output(self, output: Dict[str, Any]) -> None:
        name_width = output.get('name_width', self.MIN_NAME_WIDTH)
        if not self._is_positive_int(name_width) or name_width < self.MIN_NAME_WIDTH:
            raise ValueError(f"output.name_width must be an integer of at least {self.MIN_NAME_WIDTH}: {name_width}")
    
    @staticmethod
    def _is_positive_int(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
