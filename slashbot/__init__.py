from .__version__ import (
    __release_date__,
    __version__,
    __version_info__,
)

__all__ = [
    "__version__",
    "__version_info__",
    "__release_date__",
]
