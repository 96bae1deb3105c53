import logging
from functools import lru_cache
from itertools import count
from pathlib import Path
from typing import Any, Callable, Generator

import orjson
import pytest

from independent_reserve.api import IndependentReserveClient
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

API_URL = "https://api.example.invalid"
API_KEY = "FOO"
API_SECRET = "BAR"
FIRST_NONCE = 1_700_000_000_123_456_789

log = logging.getLogger(__name__)


def stepping_clock(start: int = FIRST_NONCE, step: int = 1_000_000) -> Callable[[], int]:
    """Return a clock that advances ``step`` nanoseconds on every read."""
    ticks = count(start, step)
    return lambda: next(ticks)


@pytest.fixture
def mock_http_client() -> Generator[
    tuple[IndependentReserveClient, MockHttpExecutor], None, None
]:
    mock_http = MockHttpExecutor(api_url=API_URL)
    client = IndependentReserveClient(
        api_key=API_KEY,
        api_secret=API_SECRET,
        api_url=API_URL,
        # replace real network requests with our mock
        executor=mock_http,
        clock=stepping_clock(),
    )

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@pytest.fixture
def public_http_client() -> Generator[
    tuple[IndependentReserveClient, MockHttpExecutor], None, None
]:
    mock_http = MockHttpExecutor(api_url=API_URL)
    client = IndependentReserveClient(api_url=API_URL, executor=mock_http)

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if path.match(f"*/{name}.*.json", case_sensitive=True)
        )
    )


def load_json(name: str, case: int | None = None) -> Any:
    case_part = f"{case}." if case is not None else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[Any, Path]]:
    """Load all json payloads for a given base name (case0, case1, ...)."""
    results = []
    for path in json_data_files(name):
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results
