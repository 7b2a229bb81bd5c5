"""
Tests for the HTTP column-inference client, using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from kmcurves.core.exceptions import CollaboratorError
from kmcurves.inference import (
    CollaboratorReply,
    ColumnInferenceClient,
    ColumnMapping,
    resolve_mapping,
)

ROWS = [{"t": 1, "e": 1, "g": "A"}, {"t": 2, "e": 0, "g": "B"}]


def make_client(handler, **kwargs):
    return ColumnInferenceClient(
        "http://inference.test", transport=httpx.MockTransport(handler), **kwargs,
    )


def run(coro):
    return asyncio.run(coro)


class TestSuccess:

    def test_posts_sample_and_parses_reply(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={
                "mapping": {"time": "t", "event": "e", "group": "g"},
                "confidence": 0.85,
                "reasoning": "abbreviated headers",
            })

        reply = run(make_client(handler).infer(ROWS))

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/kaplan/infer-columns"
        assert seen["body"] == {"rows": ROWS}
        assert isinstance(reply, CollaboratorReply)
        assert reply.mapping == ColumnMapping(time="t", event="e", group="g")
        assert reply.confidence == 0.85
        assert reply.reasoning == "abbreviated headers"

    def test_custom_path_and_headers(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"mapping": {"time": "t"}})

        client = make_client(handler, path="/infer", headers={"Authorization": "Bearer x"})
        reply = run(client(ROWS))
        assert seen == {"path": "/infer", "auth": "Bearer x"}
        assert reply.confidence is None

    def test_confidence_clamped(self):
        def handler(request):
            return httpx.Response(200, json={"mapping": {"time": "t"}, "confidence": 7})

        assert run(make_client(handler).infer(ROWS)).confidence == 1.0

    def test_no_mapping_is_none(self):
        def handler(request):
            return httpx.Response(200, json={"mapping": None, "reasoning": "unsure"})

        assert run(make_client(handler).infer(ROWS)) is None

    def test_empty_rows_make_no_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert run(make_client(handler).infer([])) is None


class TestFailures:

    def test_error_status(self):
        def handler(request):
            return httpx.Response(500, json={"error": "upstream"})

        with pytest.raises(CollaboratorError) as exc_info:
            run(make_client(handler).infer(ROWS))
        assert exc_info.value.reason == "status"
        assert exc_info.value.status_code == 500

    def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(CollaboratorError) as exc_info:
            run(make_client(handler).infer(ROWS))
        assert exc_info.value.reason == "malformed"

    def test_non_object_body(self):
        def handler(request):
            return httpx.Response(200, json=["time", "event"])

        with pytest.raises(CollaboratorError, match="list") as exc_info:
            run(make_client(handler).infer(ROWS))
        assert exc_info.value.reason == "malformed"

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CollaboratorError) as exc_info:
            run(make_client(handler).infer(ROWS))
        assert exc_info.value.reason == "network"
        assert exc_info.value.status_code is None

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(CollaboratorError) as exc_info:
            run(make_client(handler, timeout=2.0).infer(ROWS))
        assert exc_info.value.reason == "timeout"
        assert "2.0s" in str(exc_info.value)


class TestWithResolveMapping:

    def test_collaborator_mapping_used(self):
        def handler(request):
            return httpx.Response(200, json={"mapping": {"time": "t", "event": "e"}})

        result = run(resolve_mapping(ROWS, make_client(handler)))
        assert result.used_llm
        assert result.mapping == ColumnMapping(time="t", event="e")
        assert result.confidence == 0.5

    def test_service_outage_degrades_to_heuristic(self):
        rows = [{"time": 1, "status": 1}, {"time": 2, "status": 0}]

        def handler(request):
            return httpx.Response(503)

        with pytest.warns(RuntimeWarning, match="503"):
            result = run(resolve_mapping(rows, make_client(handler)))
        assert result.mapping == ColumnMapping(time="time", event="status")
        assert result.used_llm is False
