"""共有レイヤの公開インターフェース。"""

from .config import AppSettings, TwitchSettings, get_settings
from .exceptions import BaseAppError, ConfigurationError, ContractViolationError, DomainError
from .logging import configure_logging, get_logger
from .types import DTO, LocaleString, UrlString, ValueObject, dto_dict, parse_iso_datetime

__all__ = [
    "AppSettings",
    "TwitchSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "BaseAppError",
    "ConfigurationError",
    "ContractViolationError",
    "DomainError",
    "DTO",
    "ValueObject",
    "dto_dict",
    "parse_iso_datetime",
    "LocaleString",
    "UrlString",
]
