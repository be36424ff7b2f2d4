from __future__ import annotations

import pytest

from gscontext.common import AtomicCounter, Promise
from gscontext.common.exceptions import CapabilityNotFoundError
from gscontext.context import HOST_OPERATIONS, CapabilityRegistry, DefaultContext


@pytest.fixture()
def registry(context: DefaultContext) -> CapabilityRegistry:
    return CapabilityRegistry.for_context(context)


def test_registry_exposes_every_host_operation(registry: CapabilityRegistry) -> None:
    assert registry.names() == sorted(HOST_OPERATIONS)
    assert len(registry) == 8
    assert list(registry) == registry.names()
    assert "sendHttpRequest" in registry
    assert "send_http_request" not in registry


def test_invoke_dispatches_to_context_methods(registry: CapabilityRegistry) -> None:
    assert isinstance(registry.invoke("newCounter"), AtomicCounter)
    assert isinstance(registry.invoke("newPromise"), Promise)
    assert registry.invoke("newStringBuilder").append("a").append(None).to_string() == "anull"
    assert registry.invoke("indentXml", None, "<a><b/></a>").endswith("<a>\n  <b/>\n</a>")
    assert registry.invoke("readResourceFile", "gs/config/app.json", "UTF-8") == '{"name": "géoportail"}'


def test_invoke_with_keyword_arguments(registry: CapabilityRegistry) -> None:
    info = registry.invoke("newXmlInfo", None, xml_text="<a><b>x</b></a>", namespace_map={})

    assert info.evaluator.query_string(info.root, "b") == "x"


def test_unknown_capability(registry: CapabilityRegistry) -> None:
    with pytest.raises(CapabilityNotFoundError) as excinfo:
        registry.invoke("deleteEverything")

    assert excinfo.value.context.details["name"] == "deleteEverything"
    assert "indentXml" in excinfo.value.context.details["available"]
    assert "Unknown capability: deleteEverything" in str(excinfo.value)


def test_register_replaces_and_validates() -> None:
    registry = CapabilityRegistry()
    registry.register("echo", lambda value: value)
    registry.register("echo", lambda value: value * 2)

    assert registry.invoke("echo", 21) == 42
    with pytest.raises(TypeError):
        registry.register("broken", "not callable")  # type: ignore[arg-type]
    assert "broken" not in registry
