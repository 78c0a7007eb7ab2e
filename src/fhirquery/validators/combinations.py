"""パラメータの組み合わせに関するクエリ全体のチェック。"""

from fhirquery.models.validation import ParsedParameter, ValidationWarning
from fhirquery.validators.vocabulary import REPEATABLE_PARAMETERS


def parameter_key(param: ParsedParameter) -> str:
    """重複判定に使うキー（基本名＋チェーン）。修飾子は含めない。"""
    if param.chained_path:
        return f"{param.name}:{'.'.join(param.chained_path)}"
    return param.name


def check_combinations(parameters: list[ParsedParameter]) -> list[ValidationWarning]:
    """パラメータ一覧全体に対する組み合わせチェックを行う。

    - 同一パラメータの重複（繰り返しが正当なものを除く）
    - _count を伴わない _offset
    """
    warnings: list[ValidationWarning] = []

    seen: set[str] = set()
    for param in parameters:
        key = parameter_key(param)
        if key in seen and param.name not in REPEATABLE_PARAMETERS:
            warnings.append(
                ValidationWarning(
                    message=f"Duplicate parameter: '{key}' (values will be OR'd)",
                    parameter=key,
                )
            )
        seen.add(key)

    names = {param.name for param in parameters}
    if "_offset" in names and "_count" not in names:
        warnings.append(
            ValidationWarning(
                message="_offset used without _count - behavior may be undefined",
                parameter="_offset",
            )
        )

    return warnings
