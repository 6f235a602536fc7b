# File: src/stream_cut/__main__.py
# AI-SUMMARY: 支持 `python -m stream_cut` 方式运行命令行。

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
