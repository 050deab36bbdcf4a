from importlib.resources import files

from .duration import Duration
from .errors import InvalidArgumentError, InvalidOperationError
from .util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, WEEK

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Duration",
    "InvalidArgumentError",
    "InvalidOperationError",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "docs",
]
