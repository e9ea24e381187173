"""
Information modules.
"""

from hostfetch.modules.base import BaseModule, ModuleContext, UnsupportedModule
from hostfetch.modules.registry import MODULE_CLASSES, ModuleRegistry

__all__ = [
    "BaseModule",
    "ModuleContext",
    "UnsupportedModule",
    "MODULE_CLASSES",
    "ModuleRegistry",
]
