"""クエリ作成・レビュー用のMCPプロンプト定義。"""

from fastmcp import FastMCP


def register_query_prompts(mcp: FastMCP) -> None:
    """クエリ関連のMCPプロンプトを登録する。"""

    @mcp.prompt()
    async def review_query(query: str) -> str:
        """FHIR検索クエリをレビューするためのプロンプト。

        Args:
            query: レビュー対象のクエリ。
        """
        return (
            f"FHIR検索クエリ `{query}` をレビューします。\n\n"
            "## 手順\n\n"
            "1. `validate_query` ツールでクエリを検証してください。\n"
            "2. `errors` がある場合は、各エラーの `parameter` と `message` をもとに原因を説明し、"
            "修正したクエリを提案してください。\n"
            "3. `warnings` がある場合は、クエリとしては有効であることを伝えたうえで、"
            "意図した結果にならない可能性を説明してください。\n"
            "4. 修正案は再度 `validate_query` で検証し、`valid` が true になることを確認してください。\n\n"
            "## 注意事項\n\n"
            "- 未知のリソース型は警告のみです。カスタムリソースの場合は `add_resource_types` で追加できます。\n"
            "- 同一パラメータの重複は警告になります。`_include` や `_tag` など繰り返しが正当なものは対象外です。\n"
            "- **検証はクエリ文字列の文法のみが対象です。サーバーが実際にパラメータをサポートしているかは確認できません。**\n"
        )

    @mcp.prompt()
    async def build_query(resource_type: str) -> str:
        """指定したリソース型の検索クエリを組み立てるためのプロンプト。

        Args:
            resource_type: 検索対象のリソース型（例: "Patient"）。
        """
        return (
            f"リソース型 `{resource_type}` の検索クエリを組み立てます。\n\n"
            "## 手順\n\n"
            "1. `check_resource_type` ツールでリソース型が認識されているか確認してください。\n"
            "2. 利用者に検索条件（名前、日付、件数など）を確認してください。\n"
            "3. `fhirquery://vocabulary/modifiers` と `fhirquery://vocabulary/special-parameters` を参照し、"
            "適切な修飾子と特殊パラメータを選んでください。\n"
            f"4. `/{resource_type}?param=value&...` の形式でクエリを組み立て、`validate_query` で検証してください。\n\n"
            "## 注意事項\n\n"
            "- 日付・数値の比較には `ge2024-01-01` のようにプレフィックスを使用します。\n"
            "- `_offset` を使う場合は `_count` も指定してください。\n"
        )
