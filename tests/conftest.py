import json
import os
from pathlib import Path

import pytest
import yaml

SAMPLE_BASELINE = {
    "fs": {
        "readFile": "function",
        "writeFile": "function",
        "promises": {"readFile": "function"},
    },
    "net": {"connect": "function"},
    "dns": {"promises": {"lookup": "function"}},
    "os": {"cpus": "function"},
}

SAMPLE_TARGETS = {
    "alpha": {
        "fs": {
            "readFile": "function",
            "writeFile": "stub",
            "promises": {"readFile": "function"},
        },
        "net": {"connect": "function"},
        "dns": {"promises": {"lookup": "function"}},
    },
    "beta": {"fs": {"readFile": "object"}, "dns": {}},
}

SAMPLE_VERSIONS = {"alpha": "1.0.0", "beta": "2.0.0"}


@pytest.fixture(autouse=True)
def _clear_compat_env(monkeypatch):
    """Keep COMPAT_* variables from the developer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("COMPAT_"):
            monkeypatch.delenv(name, raising=False)


def write_dataset(root: Path, versions: bool = True) -> Path:
    """Write the sample data files and a config file under ``root``."""
    data_dir = root / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "baseline.json").write_text(json.dumps(SAMPLE_BASELINE))
    for target_id, tree in SAMPLE_TARGETS.items():
        (data_dir / f"{target_id}.json").write_text(json.dumps(tree))
    if versions:
        (data_dir / "versionMap.json").write_text(json.dumps(SAMPLE_VERSIONS))

    config_path = root / "compat.yaml"
    config_path.write_text(
        yaml.dump(
            {
                "data_dir": "data",
                "targets": [
                    {"id": "alpha", "title": "alpha"},
                    {"id": "beta", "title": "beta"},
                ],
                "exclude": ["os"],
            }
        )
    )
    return config_path


@pytest.fixture
def sample_config_path(tmp_path):
    return write_dataset(tmp_path)
