"""Config package init."""
from conceal.config.conceal_config import ConcealConfig
from conceal.config.validator import ConfigValidator
__all__ = ["ConcealConfig", "ConfigValidator"]
