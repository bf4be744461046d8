# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "hashstore"
__summary__ = "A content-addressable record store served over HTTP."
__url__ = "https://github.com/dgilland/hashstore"

__version__ = "0.1.0"

__install_requires__ = [
    "fs>=2.4.16",
    "fastapi>=0.110",
    "uvicorn>=0.27",
    "python-dotenv>=1.0",
]
__tests_require__ = ["pytest>=7", "httpx>=0.25"]

__author__ = "Derrick Gilland"
__email__ = "dgilland@gmail.com"

__license__ = "MIT License"
