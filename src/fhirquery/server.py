"""FastMCPベースのMCPサーバーエントリポイント。"""

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from fhirquery.config import ServerConfig
from fhirquery.prompts.query import register_query_prompts
from fhirquery.resources.vocabulary import register_vocabulary_resources
from fhirquery.services.query import QueryService
from fhirquery.tools.query import register_query_tools


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """fhirquery MCPサーバーを作成し、ツール・リソース・プロンプトを登録する。

    Args:
        config: サーバー設定。Noneの場合はデフォルト設定を使用。

    Returns:
        設定済みのFastMCPインスタンス。
    """
    if config is None:
        config = ServerConfig()

    mcp = FastMCP("fhirquery")

    # サービス層
    query_service = QueryService(config_dir=config.config_dir, options=config.validator_options())

    # MCPインターフェース登録
    register_query_tools(mcp, query_service)
    register_vocabulary_resources(mcp, query_service)
    register_query_prompts(mcp)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return mcp
