from __future__ import annotations

import os

from setuptools import setup


def read_version() -> str:
    """Read the version, preferring the environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "0.1.0"


setup(
    name="bitap",
    version=read_version(),
    description="Word-backed bit vectors and Shift-Or exact string matching.",
    long_description="Word-backed bit vectors and Shift-Or exact string matching.",
    long_description_content_type="text/plain",
    packages=["bitap"],
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
            "pyahocorasick",
        ],
    },
    entry_points={
        "console_scripts": [
            "bitap=bitap.cli:main",
        ],
    },
)
