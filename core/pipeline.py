"""Shared consumer/processor/producer scaffolding."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar

from .cli_errors import CLIError, ExitCode, report_error


PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")
RequestT = TypeVar("RequestT")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"

    def exit_code(self) -> int:
        if self.ok():
            return int(ExitCode.SUCCESS)
        return int((self.diagnostics or {}).get("code", ExitCode.ERROR))


class Consumer(Protocol[PayloadT]):
    def consume(self) -> PayloadT:
        ...


class Processor(Protocol[PayloadT, ResultT]):
    def process(self, payload: PayloadT) -> ResultT:
        ...


class Producer(Protocol[ResultT]):
    def produce(self, result: ResultT) -> None:
        ...


class RequestConsumer(Generic[RequestT], Consumer[RequestT]):
    """Generic consumer that wraps any request object.

    Example usage:
        request = SomeRequest(...)
        consumer = RequestConsumer(request)
        payload = consumer.consume()  # Returns the request
    """

    def __init__(self, request: RequestT) -> None:
        self._request = request

    def consume(self) -> RequestT:  # pragma: no cover - trivial
        return self._request


class BaseProducer:
    """Base class for pipeline producers with common error handling.

    Subclasses override _produce_success(); failed envelopes are reported
    on stderr as ``Error: ...`` with an optional ``Hint: ...`` line.
    """

    def produce(self, result: ResultEnvelope) -> None:
        if self.print_error(result):
            return
        if result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        raise NotImplementedError("Subclass must implement _produce_success")

    @staticmethod
    def print_error(result: ResultEnvelope) -> bool:
        """Print error message if result failed. Returns True if the result failed."""
        if result.ok():
            return False
        diag = result.diagnostics or {}
        msg = diag.get("message")
        if msg:
            report_error(msg, diag.get("hint"))
        return True


class SafeProcessor(Generic[RequestT, ResultT]):
    """Base processor that turns raised errors into error envelopes.

    A CLIError keeps its exit code and hint; anything else is reported as a
    general error.

    Example usage:
        class MyProcessor(SafeProcessor[Request, Result]):
            def _process_safe(self, payload: Request) -> Result:
                return Result(...)
    """

    def process(self, payload: RequestT) -> ResultEnvelope[ResultT]:
        try:
            result = self._process_safe(payload)
        except CLIError as e:
            return ResultEnvelope(
                status="error",
                diagnostics={"message": e.message, "code": int(e.code), "hint": e.hint},
            )
        except Exception as e:
            return ResultEnvelope(
                status="error",
                diagnostics={"message": str(e) or type(e).__name__, "code": int(ExitCode.ERROR)},
            )
        return ResultEnvelope(status="success", payload=result)

    def _process_safe(self, payload: RequestT) -> ResultT:
        raise NotImplementedError("Subclass must implement _process_safe")


def run_pipeline(request: Any, processor: Processor, producer: Producer) -> int:
    """Process a request, produce its output and return the CLI exit code.

    Example:
        def cmd_history(args) -> int:
            request = HistoryRequest(limit=args.history_limit)
            return run_pipeline(request, HistoryProcessor(store), HistoryProducer())
    """
    envelope = processor.process(RequestConsumer(request).consume())
    producer.produce(envelope)
    return envelope.exit_code()
