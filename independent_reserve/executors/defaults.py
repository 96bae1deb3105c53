"""Default executor configuration.

This module defines the default HTTP executor implementation used by the
Independent Reserve SDK when no custom executor is provided.
"""

from typing import Type

from independent_reserve.executors.httpx import HttpxHttpExecutor
from independent_reserve.executors.interface import HttpExecutor

DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
