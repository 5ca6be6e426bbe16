"""
Processing backend selection.

Both backends are always available and produce identical bytes:
    - numpy: vectorized NumPy / SciPy implementation (default)
    - python: per-pixel loops, useful as a readable reference
"""

from typing import Optional

from IS_Libs.constants import DEFAULT_BACKEND, SUPPORTED_BACKENDS


def get_available_backends() -> tuple:
    """
    Get the names of the processing backends.

    Returns:
        Tuple of backend names
    """
    return SUPPORTED_BACKENDS


def resolve_backend(backend: Optional[str] = None) -> str:
    """
    Validate a backend name, falling back to the default for None.

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend is None:
        return DEFAULT_BACKEND

    name = str(backend).strip().lower()
    if name not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Invalid backend: {backend}. Use {', '.join(repr(b) for b in SUPPORTED_BACKENDS)} or None."
        )
    return name
