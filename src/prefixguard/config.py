"""prefixguardの設定管理。"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from prefixguard.models.errors import ConfigurationError
from prefixguard.naming.prefixes import DEFAULT_PACKAGE_PARTS_TO_SKIP
from prefixguard.validators.manifest import DEFAULT_PROHIBITED_PACKAGE_TOKENS
from prefixguard.validators.source_tree import DEFAULT_SOURCE_INCLUDES

# 出力ディレクトリからのマニフェストの相対位置
MANIFEST_RELATIVE_PATH = Path("META-INF") / "MANIFEST.MF"

# YAML設定ファイル基準で解決するパス項目
_PATH_LIST_KEYS = ("source_roots", "test_source_roots")
_PATH_KEYS = ("manifest_path", "output_directory")


class ValidatorConfig(BaseSettings):
    """検証設定。環境変数（PREFIXGUARD_*）から読み込み可能。"""

    model_config = {"env_prefix": "PREFIXGUARD_"}

    group_id: str
    artifact_id: str
    packaging: str = "jar"

    source_roots: list[Path] = Field(default_factory=list)
    test_source_roots: list[Path] = Field(default_factory=list)
    validate_test_sources: bool = True
    source_includes: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_INCLUDES))
    skipped_files: list[str] = Field(default_factory=list)

    prohibited_package_tokens: list[str] = Field(default_factory=lambda: list(DEFAULT_PROHIBITED_PACKAGE_TOKENS))
    package_parts_to_skip: list[str] = Field(default_factory=lambda: list(DEFAULT_PACKAGE_PARTS_TO_SKIP))

    # Falseの場合、ソース配置の問題は警告のみ（マニフェスト違反は常にエラー）
    fail: bool = True

    manifest_path: Path | None = None
    output_directory: Path | None = None

    skip_packagings: list[str] = Field(default_factory=lambda: ["pom"])

    @field_validator("group_id", "artifact_id")
    @classmethod
    def _require_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    def all_source_roots(self) -> list[Path]:
        """検証対象のソースルート（本体 → テストの順）。"""
        if self.validate_test_sources:
            return [*self.source_roots, *self.test_source_roots]
        return list(self.source_roots)

    def resolved_manifest_path(self) -> Path | None:
        """明示指定が無ければ ``<output_directory>/META-INF/MANIFEST.MF`` を返す。"""
        if self.manifest_path is not None:
            return self.manifest_path
        if self.output_directory is not None:
            return self.output_directory / MANIFEST_RELATIVE_PATH
        return None


def _resolve_relative_paths(data: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    """YAML内の相対パスを設定ファイルのディレクトリ基準に解決する。"""
    resolved = dict(data)
    for key in _PATH_LIST_KEYS:
        value = resolved.get(key)
        if isinstance(value, list):
            resolved[key] = [base_dir / item if isinstance(item, str) else item for item in value]
    for key in _PATH_KEYS:
        value = resolved.get(key)
        if isinstance(value, str):
            resolved[key] = base_dir / value
    return resolved


def load_config(path: Path | None = None, **overrides: Any) -> ValidatorConfig:
    """YAMLファイルと引数から設定を構築する。

    優先順位は overrides > YAMLファイル > 環境変数。
    YAML内の相対パスは設定ファイルのディレクトリ基準、引数のパスはカレントディレクトリ基準。

    Args:
        path: YAML設定ファイルのパス。Noneの場合は読み込まない。
        **overrides: 個別に上書きする設定値。Noneの値は無視する。

    Returns:
        検証済みの設定。

    Raises:
        ConfigurationError: ファイルが読めない、または設定値が不正な場合。
    """
    data: dict[str, Any] = {}
    if path is not None:
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load configuration file {path}: {e}") from e
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ConfigurationError(f"Configuration file {path} must contain a mapping")
            data.update(_resolve_relative_paths(loaded, path.parent))

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ValidatorConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
