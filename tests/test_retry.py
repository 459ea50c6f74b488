import asyncio

import pytest

from apigateway_importer.errors import RemoteOperationError
from apigateway_importer.retry import call_with_retry

from conftest import throttled


class ScriptedClient:
    """Raises the scripted errors in order, then returns ``result``."""

    def __init__(self, *errors, result=None):
        self.errors = list(errors)
        self.result = result if result is not None else {"id": "ok"}
        self.calls = []

    async def call(self, operation, params):
        self.calls.append((operation, params))
        if self.errors:
            raise self.errors.pop(0)
        return self.result


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class TestCallWithRetry:
    def test_success_first_time(self):
        client = ScriptedClient()
        sleep = RecordingSleep()

        result = asyncio.run(call_with_retry(client, "createResource", {"a": 1}, 0.5, sleep=sleep))

        assert result == {"id": "ok"}
        assert client.calls == [("createResource", {"a": 1})]
        assert sleep.delays == []

    def test_retries_rate_limited_with_growing_delay(self):
        client = ScriptedClient(throttled(), throttled())
        sleep = RecordingSleep()

        result = asyncio.run(call_with_retry(client, "createResource", {}, 0.5, sleep=sleep))

        assert result == {"id": "ok"}
        assert len(client.calls) == 3
        assert sleep.delays == [0.5, 1.0]
        assert sleep.delays[1] > sleep.delays[0]

    def test_starting_attempt_scales_delay(self):
        client = ScriptedClient(throttled())
        sleep = RecordingSleep()

        asyncio.run(call_with_retry(client, "putMethod", {}, 0.2, attempt=3, sleep=sleep))

        assert sleep.delays == [pytest.approx(0.6)]

    def test_many_rate_limits_still_converge(self):
        client = ScriptedClient(*[throttled() for _ in range(25)])
        sleep = RecordingSleep()

        asyncio.run(call_with_retry(client, "putMethod", {}, 0.1, sleep=sleep))

        assert len(client.calls) == 26
        assert sleep.delays[-1] == pytest.approx(2.5)

    def test_other_error_not_retried(self):
        error = RemoteOperationError("createResource", "BadRequestException", "Invalid path part", status=400)
        client = ScriptedClient(error)
        sleep = RecordingSleep()

        with pytest.raises(RemoteOperationError) as exc_info:
            asyncio.run(call_with_retry(client, "createResource", {}, 0.5, sleep=sleep))

        assert exc_info.value is error
        assert len(client.calls) == 1
        assert sleep.delays == []

    def test_error_after_rate_limit_propagates(self):
        error = RemoteOperationError("putMethod", "NotFoundException", "Invalid Resource identifier", status=404)
        client = ScriptedClient(throttled(), error)

        with pytest.raises(RemoteOperationError) as exc_info:
            asyncio.run(call_with_retry(client, "putMethod", {}, 0.01, sleep=RecordingSleep()))

        assert exc_info.value is error
        assert len(client.calls) == 2

    def test_throttling_code_without_status(self):
        error = RemoteOperationError("getResources", "TooManyRequestsException", "slow down")
        assert error.rate_limited

    def test_default_sleep_is_asyncio(self):
        client = ScriptedClient(throttled())
        result = asyncio.run(call_with_retry(client, "createResource", {}, 0.001))
        assert result == {"id": "ok"}
