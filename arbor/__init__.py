__title__ = 'arbor'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .actions import *
from .commands import *
from .manuals import *
from .parameters import *
from .parser import *
from .verbs import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the resolver
__all__ += actions.__all__  # type: ignore[attr-defined]
__all__ += commands.__all__  # type: ignore[attr-defined]
__all__ += manuals.__all__  # type: ignore[attr-defined]
__all__ += parameters.__all__  # type: ignore[attr-defined]
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += verbs.__all__  # type: ignore[attr-defined]
