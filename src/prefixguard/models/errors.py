"""prefixguardのカスタム例外クラス。"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prefixguard.models.validation import ManifestViolation


class PrefixGuardError(Exception):
    """prefixguardの基底例外クラス。"""


class ConfigurationError(PrefixGuardError):
    """設定値が不正な場合の例外。"""


class InvalidPatternError(ConfigurationError):
    """スキップパターンの構文が不正な場合の例外。"""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid path pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class NonCompliantSourceError(PrefixGuardError):
    """許可プレフィックス外にソースファイルが存在する場合の例外。"""

    def __init__(self, files: list[str]) -> None:
        super().__init__(
            f"There exist {len(files)} files that seem to be placed within a problematic package"
        )
        self.files = files


class ProhibitedDependencyError(PrefixGuardError):
    """マニフェストが禁止パッケージをexport/importしている場合の例外。"""

    def __init__(self, violations: list[ManifestViolation]) -> None:
        super().__init__(
            f"There exist {len(violations)} prohibited packages in the manifest's "
            "Export-Package/Import-Package headers"
        )
        self.violations = violations


class ManifestReadError(PrefixGuardError):
    """マニフェストが読み込めない、または解析できない場合の例外。"""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read manifest {path}: {reason}")
        self.path = path
        self.reason = reason


class SourceReadError(PrefixGuardError):
    """ソースルートの走査中にファイルシステムエラーが発生した場合の例外。"""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot scan source root {path}: {reason}")
        self.path = path
        self.reason = reason
