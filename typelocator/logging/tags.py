# typelocator/logging/tags.py
"""
Central place for defining logging subsystem tags.

Prefix log messages with these so output stays searchable:

    logger.warning(f"{TRAVERSAL} Archive does not exist: {path}")
"""

TRAVERSAL = "[TRAVERSAL]"
INDEX = "[INDEX]"
RESOLVER = "[RESOLVER]"
REGISTRY = "[REGISTRY]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
