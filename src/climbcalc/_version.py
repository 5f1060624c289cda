"""climbcalc version lookup.

A source checkout reads ``[project].version`` from the repository's
pyproject.toml so the number shown by ``climbcalc --version`` tracks the
working tree; an installed wheel falls back to the distribution metadata.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version
from pathlib import Path

DISTRIBUTION = "climbcalc"
UNKNOWN_VERSION = "0.0.0"

# src/climbcalc/_version.py -> repository root
_CHECKOUT_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version(pyproject: Path) -> str | None:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return None
    project = data.get("project", {})
    if project.get("name") != DISTRIBUTION:
        return None
    found = project.get("version")
    return found if isinstance(found, str) else None


def get_version() -> str:
    """Return the climbcalc version string."""
    found = _checkout_version(_CHECKOUT_PYPROJECT)
    if found is not None:
        return found
    try:
        return _distribution_version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
