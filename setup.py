from __future__ import annotations

import re
from pathlib import Path

from setuptools import find_packages, setup


def read_version() -> str:
    init_py = Path(__file__).parent / "playlog" / "__init__.py"
    text = init_py.read_text(encoding="utf-8")
    match = re.search(r"^__version__\s*=\s*\"([^\"]+)\"\s*$", text, re.M)
    if not match:
        raise RuntimeError("Unable to find __version__ in playlog/__init__.py")
    return match.group(1)


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="playlog-export",
    version=read_version(),
    description="Render handheld play-history records as a chronological text log",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["playlog", "playlog.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "playlog-export=playlog.cli:main",
        ],
    },
    install_requires=[],
    extras_require={
        "dev": ["pytest", "ruff"],
    },
)
