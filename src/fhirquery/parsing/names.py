"""パラメータ名（基本名・チェーン・修飾子）の解析。"""

import re
from collections.abc import Callable
from dataclasses import dataclass

_IDENTIFIER = r"[a-zA-Z_][a-zA-Z0-9_-]*"

# base[:TypeModifier](.segment)*[:endModifier]
_CHAINED_NAME = re.compile(
    rf"({_IDENTIFIER})"
    r"(?::([A-Z][a-zA-Z]+))?"
    rf"((?:\.{_IDENTIFIER})*)"
    r"(?::([a-zA-Z-]+))?"
)
# base[:modifier]
_SIMPLE_NAME = re.compile(rf"({_IDENTIFIER})(?::([a-zA-Z-]+))?")


@dataclass(frozen=True)
class ParameterName:
    """パラメータ名の解析結果。errorがある場合も取り出せた部分は保持する。"""

    name: str
    modifier: str | None = None
    chained_path: tuple[str, ...] | None = None
    error: str | None = None


def parse_parameter_name(raw_name: str, is_known_modifier: Callable[[str], bool]) -> ParameterName:
    """パラメータ名を基本名・チェーン・末尾修飾子に分解する。

    チェーン形式を先に試し、一致しなければ単純形式にフォールバックする。
    どちらにも一致しない場合は生の文字列をnameとして返す。

    Args:
        raw_name: `=` より前の文字列。
        is_known_modifier: 修飾子が語彙に含まれるかを判定する関数。

    Returns:
        解析結果。形式不正や未知の修飾子の場合はerrorにメッセージが入る。
    """
    chain_match = _CHAINED_NAME.fullmatch(raw_name)
    if chain_match is None:
        simple_match = _SIMPLE_NAME.fullmatch(raw_name)
        if simple_match is None:
            return ParameterName(name=raw_name, error=f"Invalid parameter name format: '{raw_name}'")

        name, modifier = simple_match.groups()
        if modifier and not is_known_modifier(modifier):
            return ParameterName(
                name=name,
                modifier=modifier,
                error=f'Unknown modifier ":{modifier}" on parameter "{name}"',
            )
        return ParameterName(name=name, modifier=modifier)

    base_name, type_modifier, chain_part, end_modifier = chain_match.groups()
    path: list[str] = []
    if type_modifier:
        path.append(type_modifier)
    if chain_part:
        path.extend(chain_part[1:].split("."))
    chained_path = tuple(path) if path else None

    if end_modifier and not is_known_modifier(end_modifier):
        return ParameterName(
            name=base_name,
            modifier=end_modifier,
            chained_path=chained_path,
            error=f'Unknown modifier ":{end_modifier}" on parameter "{base_name}"',
        )
    return ParameterName(name=base_name, modifier=end_modifier, chained_path=chained_path)
