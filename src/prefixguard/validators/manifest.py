"""マニフェストのExport-Package/Import-Package検証ロジック。"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from prefixguard.models.errors import ManifestReadError
from prefixguard.models.validation import ManifestCheckResult, ManifestHeader, ManifestViolation

logger = logging.getLogger(__name__)

MANIFEST_HEADERS: tuple[ManifestHeader, ...] = ("Export-Package", "Import-Package")

DEFAULT_PROHIBITED_PACKAGE_TOKENS: tuple[str, ...] = ("internal",)


def parse_manifest(path: Path) -> dict[str, str]:
    """マニフェストファイルのメインセクションを読み込む。

    ``Name: value`` 形式の行と、半角スペース1つで始まる継続行を解釈する。
    メインセクションは最初の空行で終わる。

    Args:
        path: マニフェストファイルのパス。

    Returns:
        ヘッダー名から値へのマッピング。

    Raises:
        ManifestReadError: ファイルが読めない、または形式が不正な場合。
    """
    headers: dict[str, str] = {}
    current: str | None = None
    try:
        with open(path, encoding="utf-8") as f:
            for line_number, raw_line in enumerate(f, start=1):
                line = raw_line.rstrip("\r\n")
                if not line:
                    if headers:
                        break
                    continue

                if line.startswith(" "):
                    if current is None:
                        raise ManifestReadError(str(path), f"line {line_number}: continuation line without a header")
                    headers[current] += line[1:]
                    continue

                name, separator, value = line.partition(":")
                if not separator or not name.strip():
                    raise ManifestReadError(str(path), f"line {line_number}: expected 'Name: value'")
                current = name.strip()
                headers[current] = value[1:] if value.startswith(" ") else value
    except UnicodeDecodeError as e:
        raise ManifestReadError(str(path), "not valid UTF-8") from e
    except OSError as e:
        raise ManifestReadError(str(path), e.strerror or str(e)) from e

    return headers


def _split_clauses(value: str) -> list[str]:
    """ダブルクォート外のカンマでヘッダー値を分割する。"""
    clauses: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in value:
        if char == '"':
            in_quotes = not in_quotes
        if char == "," and not in_quotes:
            clauses.append("".join(current))
            current = []
        else:
            current.append(char)
    clauses.append("".join(current))
    return [clause.strip() for clause in clauses if clause.strip()]


def split_package_names(value: str) -> list[str]:
    """ヘッダー値からパッケージ名を取り出す。

    ``com.a;com.b;version="[1.0,2)"`` のような節では、最初の属性・ディレクティブ
    （``=`` を含む要素）より前の要素がパッケージ名になる。
    """
    names: list[str] = []
    for clause in _split_clauses(value):
        for element in clause.split(";"):
            element = element.strip()
            if "=" in element:
                break
            if element:
                names.append(element)
    return names


class ManifestValidator:
    """禁止トークンを含むパッケージのexport/importを検出する。"""

    def __init__(self, prohibited_tokens: Iterable[str] = DEFAULT_PROHIBITED_PACKAGE_TOKENS) -> None:
        self._prohibited_tokens = list(prohibited_tokens)

    def validate(self, headers: Mapping[str, str]) -> ManifestCheckResult:
        """ヘッダーのマッピングを検証する。

        存在しないヘッダーは検証対象外で、エラーにもならない。
        """
        result = ManifestCheckResult()
        for header in MANIFEST_HEADERS:
            value = headers.get(header)
            if value is None:
                continue
            result.checked_headers.append(header)
            for package_name in split_package_names(value):
                for token in self._prohibited_tokens:
                    if token in package_name:
                        result.violations.append(
                            ManifestViolation(header=header, package_name=package_name, token=token)
                        )
        return result

    def validate_file(self, manifest_path: Path) -> ManifestCheckResult | None:
        """マニフェストファイルを検証する。ファイルが無い場合はNoneを返す。

        Raises:
            ManifestReadError: ファイルが存在するが読めない場合。
        """
        if not manifest_path.exists():
            logger.info("No manifest found at %s, skipping manifest validation", manifest_path)
            return None
        return self.validate(parse_manifest(manifest_path))
