# docman_sdk/frontend/__init__.py
from .base import router
from .renderer import ListViewRenderer, ListRenderContext
from .session import ListViewManager
from .templating import initialize_templates, get_templates

__all__ = [
    "router",
    "ListViewRenderer",
    "ListRenderContext",
    "ListViewManager",
    "initialize_templates",
    "get_templates",
]
