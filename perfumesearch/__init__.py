"""perfumesearch package: async perfume search helpers + CLI."""
from .config import *  # noqa: F401,F403
from .errors import *  # noqa: F401,F403
from .filters import *  # noqa: F401,F403
from .search import *  # noqa: F401,F403

__all__ = [name for name in globals() if not name.startswith("_")]
