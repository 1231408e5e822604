"""テスト共通フィクスチャ。"""

from collections.abc import Callable
from pathlib import Path

import pytest

from prefixguard.config import ValidatorConfig


@pytest.fixture
def make_source_tree(tmp_path: Path) -> Callable[..., Path]:
    """相対パスのリストからソースツリーを作成するファクトリ。"""

    def _make(*relative_paths: str, root_name: str = "src/main/java") -> Path:
        root = tmp_path / root_name
        root.mkdir(parents=True, exist_ok=True)
        for relative_path in relative_paths:
            file_path = root / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text("class X {}\n", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[[str], Path]:
    """MANIFEST.MFをtarget/classes/META-INF配下に書き出すファクトリ。"""

    def _write(content: str) -> Path:
        manifest = tmp_path / "target" / "classes" / "META-INF" / "MANIFEST.MF"
        manifest.parent.mkdir(parents=True, exist_ok=True)
        manifest.write_text(content, encoding="utf-8")
        return manifest

    return _write


@pytest.fixture
def base_config(tmp_path: Path) -> ValidatorConfig:
    """com.cedarsoft:testモジュールのテスト用設定。"""
    return ValidatorConfig(
        group_id="com.cedarsoft",
        artifact_id="test",
        source_roots=[tmp_path / "src/main/java"],
        test_source_roots=[tmp_path / "src/test/java"],
        output_directory=tmp_path / "target" / "classes",
    )
