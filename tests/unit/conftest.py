import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import orjson

DATA_DIR = Path(__file__).parent.joinpath("data")

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


@lru_cache(maxsize=None)
def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if path.match(f"*/{name}.*.json")
        )
    )


def load_json(name: str, case: int | None = None) -> Any:
    case_part = f"case{case}." if case is not None else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[Any, Path]]:
    """Load all json payloads for a given base name (case0, case1, ...)."""
    results = []
    for path in json_data_files(name):
        log.debug("Loading json from %s", path.as_posix())
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results


def load_bytes(name: str, case: int = 0) -> bytes:
    """Raw fixture bytes, for tests that exercise the JSON parsing boundary."""
    return DATA_DIR.joinpath(f"{name}.case{case}.json").read_bytes()
