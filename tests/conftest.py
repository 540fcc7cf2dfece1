import base64
import json

import pytest


def inline_directive(source_map: dict) -> str:
    payload = base64.b64encode(json.dumps(source_map).encode("utf-8")).decode("ascii")
    return f"//# sourceMappingURL=data:application/json;charset=utf-8;base64,{payload}"


@pytest.fixture
def write_bundle(tmp_path):
    """
    Factory writing a generated file whose last line points to `source_map`.

    `inline=True` embeds the map as a base64 data URI, otherwise it is written next to
    the bundle as `<name>.map`. Returns the bundle path as a string.
    """

    def _write(name, code, source_map, inline=True, directory=None):
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        bundle = target_dir / name

        if inline:
            directive = inline_directive(source_map)
        else:
            (target_dir / f"{name}.map").write_text(json.dumps(source_map), encoding="utf-8")
            directive = f"//# sourceMappingURL={name}.map"

        body = f"{code}\n{directive}" if code else directive
        bundle.write_bytes(body.encode("utf-8"))
        return str(bundle)

    return _write


@pytest.fixture
def simple_map():
    return {
        "version": 3,
        "file": "bundle.js",
        "sources": ["../src/a.js", "../src/b.js"],
        "names": [],
        "mappings": "AAAA,ICAA;AACA",
    }
