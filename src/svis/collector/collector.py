import logging
import os
from typing import List, Optional

from opentelemetry import trace

from ..errors import DiscoveryError
from .config import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class SourceCollector:
    """
    Lists the generated files a batch should analyze.

    A file path is taken as-is. A directory is scanned non-recursively for regular files
    whose extension is in the allow-list; entries without an extension and sub-directories
    are skipped. The result is sorted so batch output is identical across runs and platforms.
    """

    def __init__(self, root: str):
        self.root = root
        self.valid_exts = SUPPORTED_EXTENSIONS

    def collect(self) -> List[str]:
        """
        Raises:
            DiscoveryError: If `root` does not exist or cannot be listed.
        """
        with tracer.start_as_current_span("collector.collect") as span:
            span.set_attribute("collector.root", self.root)

            try:
                is_dir = os.path.isdir(self.root)
                if not is_dir:
                    # stat() surfaces a missing or unreadable path as OSError.
                    os.stat(self.root)
                    files = [self.root]
                else:
                    files = self._scan_directory()
            except OSError as e:
                raise DiscoveryError(f"Cannot read path {self.root}: {e}", path=self.root) from e

            files.sort()
            span.set_attribute("collector.total_files", len(files))
            logger.info(f"Collection complete. Found {len(files)} candidate files in {self.root}")
            return files

    def _scan_directory(self) -> List[str]:
        files = []
        with os.scandir(self.root) as entries:
            for entry in entries:
                ext = self._extension(entry.name)
                if ext is None or ext not in self.valid_exts:
                    continue
                try:
                    if not entry.is_file():
                        continue
                except OSError:
                    logger.warning(f"Skipping unreadable entry {entry.path}")
                    continue
                files.append(os.path.join(self.root, entry.name))
        return files

    @staticmethod
    def _extension(name: str) -> Optional[str]:
        _, ext = os.path.splitext(name)
        if not ext:
            return None
        return ext[1:]


def discover_files(path: str) -> List[str]:
    """Candidate generated files under `path`, sorted lexicographically."""
    return SourceCollector(path).collect()
