"""
LOGSCOPE UI Views Package
"""

from .log_browser import LogBrowserView

__all__ = [
    'LogBrowserView',
]
