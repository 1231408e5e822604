"""モジュール座標から導出したパッケージプレフィックスの検証ツール。"""

__version__ = "0.1.0"
