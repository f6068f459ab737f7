"""HTTP executor implementations.

This package provides pluggable async HTTP client implementations for the SDK,
supporting multiple underlying libraries like httpx, aiohttp and requests.
"""

from binance_account.executors.aiohttp import AiohttpHttpExecutor
from binance_account.executors.defaults import DEFAULT_HTTP_EXECUTOR
from binance_account.executors.httpx import HttpxHttpExecutor
from binance_account.executors.interface import HttpExecutor, HttpResponse
from binance_account.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "AiohttpHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
