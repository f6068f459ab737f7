"""Default executor configuration.

This module defines the default HTTP executor implementation used by the SDK
when no custom executor is provided.
"""

from typing import Type

from binance_account.executors.httpx import HttpxHttpExecutor
from binance_account.executors.interface import HttpExecutor

DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
