"""クエリ検証のMCPツール定義。"""

from typing import Any

from fastmcp import FastMCP

from fhirquery.models.errors import FhirQueryError
from fhirquery.services.query import QueryService


def register_query_tools(mcp: FastMCP, query_service: QueryService) -> None:
    """クエリ検証関連のMCPツールを登録する。"""

    @mcp.tool()
    async def validate_query(query: str) -> dict[str, Any]:
        """FHIR検索クエリ文字列を検証する。

        クエリの有効性、エラー、警告、および分解結果（リソース型、ID、
        バージョン、パラメータ一覧）を返します。サーバーへの問い合わせは行いません。

        Args:
            query: 検証するクエリ（例: "/Patient?name=John&_count=10"）。
        """
        try:
            return query_service.validate(query).model_dump()
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def validate_queries(queries: list[str]) -> dict[str, Any]:
        """複数のFHIR検索クエリ文字列をまとめて検証する。

        Args:
            queries: 検証するクエリのリスト。
        """
        try:
            results = query_service.validate_many(queries)
            return {
                "count": len(results),
                "valid_count": sum(1 for r in results if r.valid),
                "results": [{"query": q, **r.model_dump()} for q, r in zip(queries, results, strict=True)],
            }
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def is_valid_query(query: str) -> dict[str, Any]:
        """クエリがエラーなしで有効かどうかだけを判定する。

        Args:
            query: 判定するクエリ。
        """
        try:
            return {"query": query, "valid": query_service.is_valid(query)}
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def check_resource_type(name: str) -> dict[str, Any]:
        """リソース型が認識済みかどうかを判定する（大文字小文字を区別しない）。

        Args:
            name: リソース型名（例: "Patient"）。
        """
        try:
            return {"name": name, "known": query_service.is_valid_resource_type(name)}
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def check_modifier(name: str) -> dict[str, Any]:
        """修飾子が認識済みかどうかを判定する（大文字小文字を区別しない）。

        Args:
            name: 修飾子名（例: "exact"）。先頭のコロンは付けない。
        """
        try:
            return {"name": name, "known": query_service.is_valid_modifier(name)}
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def add_resource_types(names: list[str]) -> dict[str, Any]:
        """カスタムリソース型を語彙に追加する。

        追加したリソース型は参照先の型修飾子としても使用できるようになります。

        Args:
            names: 追加するリソース型名のリスト。
        """
        try:
            resource_types = query_service.add_resource_types(names)
            return {"added": names, "resource_type_count": len(resource_types)}
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def add_modifiers(names: list[str]) -> dict[str, Any]:
        """カスタム修飾子を語彙に追加する。

        Args:
            names: 追加する修飾子名のリスト。先頭のコロンは付けない。
        """
        try:
            modifiers = query_service.add_modifiers(names)
            return {"added": names, "modifier_count": len(modifiers)}
        except FhirQueryError as e:
            return {"error": type(e).__name__, "message": str(e)}
