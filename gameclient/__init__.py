"""Session and progress-synchronisation core for the platformer client."""

from .context import GameContext, build_context

__version__ = "0.1.0"

__all__ = ["GameContext", "build_context", "__version__"]
