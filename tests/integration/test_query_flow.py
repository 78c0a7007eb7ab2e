"""クエリ検証フローのMCPプロトコル経由統合テスト。"""

import json
from pathlib import Path

import pytest
import yaml
from fastmcp import Client

from fhirquery.config import ServerConfig
from fhirquery.server import create_server
from fhirquery.validators.vocabulary import VOCABULARY_FILE_NAME


@pytest.fixture
def mcp_server(server_config: ServerConfig) -> object:
    """テスト用MCPサーバー。"""
    return create_server(server_config)


def parse_tool_result(result: object) -> dict:
    """CallToolResultからJSONデータを抽出する。"""
    content = result.content  # type: ignore[union-attr]
    assert len(content) > 0
    return json.loads(content[0].text)  # type: ignore[union-attr]


class TestQueryFlowViaMCP:
    async def test_validate_valid_query(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            result = await client.call_tool("validate_query", {"query": "/Patient?name:exact=John&_count=10"})
            data = parse_tool_result(result)
            assert data["valid"] is True
            assert data["errors"] == []
            assert data["parsed"]["resource_type"] == "Patient"
            assert data["parsed"]["parameters"][0]["modifier"] == "exact"

    async def test_validate_invalid_query(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            result = await client.call_tool("validate_query", {"query": "/Patient?_count=abc"})
            data = parse_tool_result(result)
            assert data["valid"] is False
            assert data["errors"][0]["kind"] == "error"
            assert data["errors"][0]["parameter"] == "_count"

    async def test_validate_malformed_envelope(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            result = await client.call_tool("validate_query", {"query": "not a query"})
            data = parse_tool_result(result)
            assert data["valid"] is False
            assert data["parsed"] is None

    async def test_validate_queries_batch(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            result = await client.call_tool(
                "validate_queries",
                {"queries": ["/Patient?_offset=10", "/Patient?_summary=all"]},
            )
            data = parse_tool_result(result)
            assert data["count"] == 2
            assert data["valid_count"] == 1
            assert data["results"][0]["query"] == "/Patient?_offset=10"
            assert len(data["results"][0]["warnings"]) == 1
            assert data["results"][1]["valid"] is False

    async def test_extend_vocabulary(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            result = await client.call_tool("check_resource_type", {"name": "Gizmo"})
            assert parse_tool_result(result)["known"] is False

            result = await client.call_tool("add_resource_types", {"names": ["Gizmo"]})
            data = parse_tool_result(result)
            assert data["added"] == ["Gizmo"]

            result = await client.call_tool("check_resource_type", {"name": "gizmo"})
            assert parse_tool_result(result)["known"] is True
            result = await client.call_tool("check_modifier", {"name": "Gizmo"})
            assert parse_tool_result(result)["known"] is True

            await client.call_tool("add_modifiers", {"names": ["phonetic"]})
            result = await client.call_tool("is_valid_query", {"query": "/Gizmo?name:phonetic=x"})
            assert parse_tool_result(result)["valid"] is True

    async def test_invalid_vocabulary_file_error(self, tmp_path: Path) -> None:
        (tmp_path / VOCABULARY_FILE_NAME).write_text("resource_types: Patient\n", encoding="utf-8")
        server = create_server(ServerConfig(config_dir=tmp_path))
        async with Client(server) as client:
            result = await client.call_tool("validate_query", {"query": "/Patient"}, raise_on_error=False)
            data = parse_tool_result(result)
            assert data["error"] == "VocabularyFileError"

    async def test_list_tools_via_mcp(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            tools = await client.list_tools()
            tool_names = {t.name for t in tools}
            assert {
                "validate_query",
                "validate_queries",
                "is_valid_query",
                "check_resource_type",
                "check_modifier",
                "add_resource_types",
                "add_modifiers",
            } <= tool_names

    async def test_vocabulary_resources(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            resources = await client.list_resources()
            resource_uris = {str(r.uri) for r in resources}
            assert "fhirquery://vocabulary/resource-types" in resource_uris
            assert "fhirquery://vocabulary/modifiers" in resource_uris
            assert "fhirquery://vocabulary/special-parameters" in resource_uris

            contents = await client.read_resource("fhirquery://vocabulary/special-parameters")
            data = yaml.safe_load(contents[0].text)  # type: ignore[union-attr]
            assert "_include" in data["special_parameters"]

    async def test_prompts(self, mcp_server: object) -> None:
        async with Client(mcp_server) as client:  # type: ignore[arg-type]
            prompts = await client.list_prompts()
            assert {"review_query", "build_query"} <= {p.name for p in prompts}

            result = await client.get_prompt("review_query", {"query": "/Patient?_count=abc"})
            text = result.messages[0].content.text  # type: ignore[union-attr]
            assert "/Patient?_count=abc" in text
            assert "validate_query" in text
