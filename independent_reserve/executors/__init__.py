from independent_reserve.executors.defaults import DEFAULT_HTTP_EXECUTOR
from independent_reserve.executors.httpx import HttpxHttpExecutor
from independent_reserve.executors.interface import HttpExecutor, HttpResponse
from independent_reserve.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
