"""Top-level package for the math text toolkit.

Provides subpackages:
- mathtext_toolkit.formatter – canonicalization pipeline (stages 1-7)
- mathtext_toolkit.tokenizer – inline element parser for canonical lines
- mathtext_toolkit.equations – equation extraction and validation
- mathtext_toolkit.pedagogy – step action and variable color heuristics
- mathtext_toolkit.core – models, payload schema and serialization
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("mathtext-toolkit")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
