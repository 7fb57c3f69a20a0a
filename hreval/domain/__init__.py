"""Domain layer: records mirrored from the backend and the client-side rules."""

from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all
from . import rules

__all__ = [*_models_all, "rules"]
