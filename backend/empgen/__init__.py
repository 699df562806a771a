"""Employee generator: a FastAPI service that seeds and clears an employees collection in MongoDB."""

from empgen.core.version import APP_VERSION as __version__

__all__ = ["__version__"]
