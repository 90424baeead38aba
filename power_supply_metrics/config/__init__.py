"""
Configuration parsing module with nginx-like syntax support.
"""

from .loader import ConfigError, ConfigLoader
from .parser import ConfigParser, LexerError, ParseError, Token, TokenType, tokenize
from .schema import Config, LoggingConfig, MQTTConfig, PowerSupplyConfig, RetainMode

__all__ = [
    "Token",
    "TokenType",
    "tokenize",
    "LexerError",
    "ParseError",
    "ConfigParser",
    "ConfigError",
    "ConfigLoader",
    "Config",
    "LoggingConfig",
    "MQTTConfig",
    "PowerSupplyConfig",
    "RetainMode",
]
