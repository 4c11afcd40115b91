"""setup-order package root."""

from setup_order.exceptions import ConfigurationError, ScriptParseError, SetupOrderError

__all__ = ["__version__", "ConfigurationError", "ScriptParseError", "SetupOrderError"]

__version__ = "0.1.0"
