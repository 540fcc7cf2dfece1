from .collector import SourceCollector, discover_files

__all__ = ["SourceCollector", "discover_files"]
