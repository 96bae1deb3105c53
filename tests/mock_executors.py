import inspect
import logging
from collections import deque
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Iterable,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    TypeAlias,
)

import orjson

from independent_reserve.executors import HttpExecutor
from independent_reserve.executors.interface import HttpResponse

log = logging.getLogger(__name__)


class MockExecutorException(Exception):
    pass


class InputPack(NamedTuple):
    function_name: str
    arg_pack: Tuple


class MockOutput:
    pass


class MockValidationFailure(MockExecutorException):
    input_pack: InputPack
    message: str


class MockOutputExhausted(MockExecutorException):
    input_pack: InputPack


class MockOutputNotExhausted(MockExecutorException):
    remaining_staged_outputs: deque[MockOutput]


# returns false or raises MockValidationFailure on error
InputValidation: TypeAlias = Callable[[InputPack], bool]


@dataclass
class MockExceptionOutput(MockOutput):
    exception: Exception
    call_validation: InputValidation | None = None


@dataclass
class MockSuccessfulOutput(MockOutput):
    output: Any
    call_validation: InputValidation | None = None


def json_response(body: Any, status: int = 200) -> HttpResponse:
    """Build an HttpResponse whose content is ``body`` encoded as JSON."""
    return HttpResponse(
        status=status,
        content=orjson.dumps(body),
        headers={"content-type": "application/json; charset=utf-8"},
    )


class MockHttpExecutor(HttpExecutor):
    def __init__(self, api_url: str = "https://api.example.invalid"):
        self.api_url = api_url
        self.call_log: list[InputPack] = []
        self.staged_outputs: deque[MockOutput] = deque()

    def stage_output(self, output: MockOutput | Iterable[MockOutput]) -> None:
        """Stage an output to be returned by the next request."""
        if isinstance(output, Iterable):
            self.staged_outputs.extend(output)
        else:
            self.staged_outputs.append(output)

    def _execute_mock(self, input_pack: InputPack) -> Any:
        """Execute a mock operation with the given input pack."""
        self.call_log.append(input_pack)
        if not self.staged_outputs:
            raise MockOutputExhausted(input_pack)
        output = self.staged_outputs.popleft()
        if output.call_validation is not None and not output.call_validation(
            input_pack
        ):
            raise MockValidationFailure(input_pack, "Validation failed")
        if isinstance(output, MockExceptionOutput):
            raise output.exception
        elif isinstance(output, MockSuccessfulOutput):
            return output.output
        raise MockExecutorException(f"Unexpected staged mock {output=}")

    def send(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        json: Optional[Mapping[str, Any]] = None,
    ) -> HttpResponse:
        input_pack = InputPack(inspect.stack()[0].function, (method, path, query, json))
        return self._execute_mock(input_pack)
