"""Aggregate project sources into plain-text context files for LLM chats."""

from .builder import generate_context
from .config import ConfigError, ContextConfig, load_config

__version__ = "0.1.0"

__all__ = ["ConfigError", "ContextConfig", "generate_context", "load_config"]
