from .app import LogScopeApp, run_app

__all__ = [
    'LogScopeApp',
    'run_app',
]
