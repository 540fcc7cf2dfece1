import os

import pytest

from svis.collector.collector import SourceCollector, discover_files
from svis.errors import DiscoveryError


class TestCollectorLogic:
    """
    Unit tests for File Discovery.
    Focuses on the extension filter and the ordering guarantees.
    """

    def test_directory_listing_is_sorted_and_filtered(self, tmp_path):
        for name in ["z.js", "a.js", "m.js.map", "b.js"]:
            (tmp_path / name).write_text("x", encoding="utf-8")

        files = discover_files(str(tmp_path))

        assert [os.path.basename(f) for f in files] == ["a.js", "b.js", "z.js"]
        assert files == sorted(files)
        assert all(f.startswith(str(tmp_path)) for f in files)

    def test_entries_without_extension_are_skipped(self, tmp_path):
        (tmp_path / "LICENSE").write_text("x", encoding="utf-8")
        (tmp_path / ".js").write_text("x", encoding="utf-8")
        (tmp_path / "main.js").write_text("x", encoding="utf-8")

        files = discover_files(str(tmp_path))

        assert [os.path.basename(f) for f in files] == ["main.js"]

    def test_extension_match_is_exact(self, tmp_path):
        for name in ["upper.JS", "module.mjs", "types.d.ts", "ok.min.js"]:
            (tmp_path / name).write_text("x", encoding="utf-8")

        files = discover_files(str(tmp_path))

        assert [os.path.basename(f) for f in files] == ["ok.min.js"]

    def test_scan_is_not_recursive(self, tmp_path):
        nested = tmp_path / "chunks"
        nested.mkdir()
        (nested / "deep.js").write_text("x", encoding="utf-8")
        (tmp_path / "vendor.js").mkdir()
        (tmp_path / "top.js").write_text("x", encoding="utf-8")

        files = discover_files(str(tmp_path))

        assert [os.path.basename(f) for f in files] == ["top.js"]

    def test_single_file_is_returned_as_is(self, tmp_path):
        bundle = tmp_path / "bundle.map.txt"
        bundle.write_text("x", encoding="utf-8")

        assert discover_files(str(bundle)) == [str(bundle)]

    def test_missing_path_raises_discovery_error(self, tmp_path):
        missing = str(tmp_path / "nope")

        with pytest.raises(DiscoveryError) as exc_info:
            discover_files(missing)

        assert exc_info.value.path == missing
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_collector_uses_configured_extensions(self, tmp_path):
        (tmp_path / "a.cjs").write_text("x", encoding="utf-8")
        collector = SourceCollector(str(tmp_path))
        collector.valid_exts = {"cjs"}

        assert [os.path.basename(f) for f in collector.collect()] == ["a.cjs"]
