import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Generator

import orjson
import pytest

from binance_account.account import Account
from binance_account.config import Config
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

# fixed signing time so that signed queries are reproducible
FIXED_TIMESTAMP = 1700000000000
DEFAULT_TEST_RECV_WINDOW = 5000

log = logging.getLogger(__name__)


@pytest.fixture
def mock_http_client() -> Generator[tuple[Account, MockHttpExecutor], None, None]:
    mock_http = MockHttpExecutor()
    client = Account(
        api_key="FOO",
        secret_key="BAR",
        # the endpoint does not matter as it will not be used with the mock in place
        config=Config(
            rest_api_endpoint="api.gaierror.xyz",
            recv_window=DEFAULT_TEST_RECV_WINDOW,
        ),
        # replace real network requests with our mock
        executor=mock_http,
        clock=lambda: FIXED_TIMESTAMP,
    )

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
            if path.match(f"{name}.*.json")
        )
    )


def load_json(name: str, case: int | None = None) -> Any:
    case_part = f"{case}." if case else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[Any, Path]]:
    """Load all json payloads for a given base name (case1, case2, ...)."""
    results = []
    for path in json_data_files(name):
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results
