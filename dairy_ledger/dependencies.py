"""
FastAPI dependency injection.
One data context per process, created on startup.
"""

from typing import Optional

from .config import settings
from .context import DataContext


# Global instance (initialized on startup)
_context: Optional[DataContext] = None


async def init_dependencies(context: Optional[DataContext] = None):
    """Initialize global dependencies. Called on app startup."""
    global _context

    if context is None:
        context = DataContext.from_settings(settings)
        await context.start(seed=settings.seed_initial_data)

        if settings.connectivity_probe_url:
            context.connectivity.start_watching(
                settings.connectivity_probe_url,
                settings.connectivity_probe_interval
            )

    _context = context


async def close_dependencies():
    """Close global dependencies. Called on app shutdown."""
    global _context
    if _context:
        await _context.close()
        _context = None


def get_context() -> DataContext:
    """Get the data context instance."""
    if _context is None:
        raise RuntimeError("Data context not initialized")
    return _context
