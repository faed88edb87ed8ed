__title__ = 'posixargs'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
__version__ = "0.1.0"

from .arguments import *
from .specification import *
from .lexer import *
from .distributor import *
from .commands import *
from .faults import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the specification
__all__ += specification.__all__  # type: ignore[attr-defined]
# Load the exposed API of the lexer
__all__ += lexer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the distributor
__all__ += distributor.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
