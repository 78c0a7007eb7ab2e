"""クエリ外形（リソース型・ID・バージョン・パラメータ文字列）の解析。"""

import re
from dataclasses import dataclass

# /Type, /Type/id, /Type/id/_history/vid（いずれも ?params 付き可）
_ENVELOPE_PATTERN = re.compile(
    r"/?(?:fhir/)?(?:r[34]/)?"
    r"([A-Z][a-zA-Z]+)"
    r"(?:/([A-Za-z0-9.-]+))?"
    r"(?:/_history/([A-Za-z0-9.-]+))?"
    r"(?:\?(.*))?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Envelope:
    """クエリ外形の解析結果。"""

    resource_type: str | None = None
    resource_id: str | None = None
    version_id: str | None = None
    query_string: str = ""
    offset: int = 0


def parse_envelope(query: str) -> Envelope | None:
    """クエリ文字列から外形を取り出す。

    パス部分が無く `=` を含む文字列は、パラメータ文字列のみとして扱う。

    Args:
        query: 空でないクエリ文字列。

    Returns:
        解析結果。どの形式にも当てはまらない場合はNone。
        offsetはパラメータ文字列がquery内で始まる位置。
    """
    match = _ENVELOPE_PATTERN.fullmatch(query)
    if match:
        resource_type, resource_id, version_id, query_string = match.groups()
        return Envelope(
            resource_type=resource_type,
            resource_id=resource_id,
            version_id=version_id,
            query_string=query_string or "",
            offset=match.start(4) if query_string is not None else len(query),
        )

    if "=" in query:
        if query.startswith("?"):
            return Envelope(query_string=query[1:], offset=1)
        return Envelope(query_string=query)

    return None
