"""Renderers turning loaded bundles into generated source files."""

from .base import COMMENT_STYLE_NORMAL, COMMENT_STYLE_SCM_SAFE, HeaderInfo, create_environment
from .cpp import CppRenderer
from .java import STYLE_DIRECT, STYLE_FUNCTOR, JavaRenderer
from .properties import PropertiesRenderer

__all__ = [
    "COMMENT_STYLE_NORMAL",
    "COMMENT_STYLE_SCM_SAFE",
    "CppRenderer",
    "HeaderInfo",
    "JavaRenderer",
    "PropertiesRenderer",
    "STYLE_DIRECT",
    "STYLE_FUNCTOR",
    "create_environment",
]
