"""
Shared fixtures for the automation editor test suite
"""
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from automation_editor.catalog.catalog import get_catalog
from automation_editor.graph.builder import GraphBuilder
from automation_editor.graph.mutator import GraphMutator
from automation_editor.services.automation_client import AutomationApiClient


@pytest.fixture
def catalog():
    """Shared static catalog."""
    return get_catalog()


@pytest.fixture
def graph(catalog):
    """Graph of a new automation: only the unset trigger node."""
    return GraphBuilder(catalog).build_default_graph()


@pytest.fixture
def mutator(graph, catalog):
    """Mutator bound to the default graph."""
    return GraphMutator(graph, catalog)


@pytest.fixture
def api_calls() -> List[Dict[str, Any]]:
    """Requests recorded by the mock persistence API."""
    return []


@pytest.fixture
def make_client(api_calls) -> Callable[..., AutomationApiClient]:
    """
    Build an AutomationApiClient whose transport is a mock persistence API.

    The mock answers every request with `status_code` and `body`, and
    records method, path and JSON body in `api_calls`.
    """
    def factory(status_code: int = 201, body: Any = None) -> AutomationApiClient:
        def handler(request: httpx.Request) -> httpx.Response:
            api_calls.append({
                "method": request.method,
                "path": request.url.path,
                "json": json.loads(request.content) if request.content else None,
                "authorization": request.headers.get("authorization")
            })
            return httpx.Response(status_code, json=body if body is not None else {"id": 1})

        return AutomationApiClient(
            base_url="http://automation-api.test",
            token="test-token",
            transport=httpx.MockTransport(handler)
        )

    return factory
