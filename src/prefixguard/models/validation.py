"""バリデーション結果のデータモデル。"""

from typing import Literal

from pydantic import BaseModel, Field

ManifestHeader = Literal["Export-Package", "Import-Package"]

ValidationOutcome = Literal["success", "warning", "failure"]


class ManifestViolation(BaseModel):
    """マニフェストヘッダー内の禁止パッケージ1件。"""

    header: ManifestHeader
    package_name: str
    token: str


class ManifestCheckResult(BaseModel):
    """マニフェスト検証の結果。"""

    checked_headers: list[ManifestHeader] = Field(default_factory=list)
    violations: list[ManifestViolation] = Field(default_factory=list)


class ValidationReport(BaseModel):
    """1回の検証実行の集約結果。"""

    group_id: str
    artifact_id: str
    allowed_prefixes: list[str] = Field(default_factory=list)
    source_roots: list[str] = Field(default_factory=list)
    problematic_files: list[str] = Field(default_factory=list)
    manifest_path: str | None = None
    manifest_checked: bool = False
    manifest_checked_headers: list[ManifestHeader] = Field(default_factory=list)
    manifest_violations: list[ManifestViolation] = Field(default_factory=list)
    skipped: bool = False
    outcome: ValidationOutcome = "success"
