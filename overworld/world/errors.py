class WorldLoadError(ValueError):
    """Persisted world state is malformed and cannot be loaded as-is."""


__all__ = ["WorldLoadError"]
