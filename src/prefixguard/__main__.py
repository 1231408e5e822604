"""prefixguardのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    import sys

    from prefixguard.cli import main

    sys.exit(main())
