from .config import DEFAULT_SECRET_BASE_PATH, DEFAULT_SECRET_FIELD, RegistryConfig

__all__ = [
    "DEFAULT_SECRET_BASE_PATH",
    "DEFAULT_SECRET_FIELD",
    "RegistryConfig",
]
