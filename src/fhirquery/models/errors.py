"""fhirqueryのカスタム例外クラス。"""


class FhirQueryError(Exception):
    """fhirqueryの基底例外クラス。"""


class VocabularyFileError(FhirQueryError):
    """語彙定義ファイルの読み込みに失敗した場合の例外。"""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid vocabulary file {path}: {reason}")
        self.path = path
        self.reason = reason


class PercentDecodingError(FhirQueryError):
    """パーセントエンコーディングのデコードに失敗した場合の例外。"""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Malformed percent-encoding in '{value}': {reason}")
        self.value = value
        self.reason = reason
