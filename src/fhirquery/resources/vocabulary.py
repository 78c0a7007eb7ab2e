"""検索語彙のMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from fhirquery.services.query import QueryService


def register_vocabulary_resources(mcp: FastMCP, query_service: QueryService) -> None:
    """語彙関連のMCPリソースを登録する。"""

    @mcp.resource("fhirquery://vocabulary/resource-types")
    async def resource_types() -> str:
        """認識済みのリソース型一覧（小文字）を取得する。

        語彙定義ファイルや add_resource_types で追加されたものを含みます。
        """
        data = {"resource_types": query_service.describe_vocabulary()["resource_types"]}
        return yaml.dump(data, allow_unicode=True, default_flow_style=False)

    @mcp.resource("fhirquery://vocabulary/modifiers")
    async def modifiers() -> str:
        """認識済みの修飾子を取得する。

        パラメータ型ごとの既定の修飾子と、リソース型を含む全修飾子の一覧を返します。
        """
        vocabulary = query_service.describe_vocabulary()
        data = {
            "categories": vocabulary["modifier_categories"],
            "modifiers": vocabulary["modifiers"],
        }
        return yaml.dump(data, allow_unicode=True, default_flow_style=False)

    @mcp.resource("fhirquery://vocabulary/special-parameters")
    async def special_parameters() -> str:
        """全リソース型に共通する特殊パラメータ（_include, _sort など）の一覧を取得する。"""
        data = {"special_parameters": query_service.describe_vocabulary()["special_parameters"]}
        return yaml.dump(data, allow_unicode=True, default_flow_style=False)
