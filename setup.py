#!/usr/bin/env python3
"""Setup script for Daemon Manager."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the long description from README
README = Path("README.md")
long_description = README.read_text() if README.exists() else ""

# Read version from package
version = "0.3.0"

setup(
    name="daemon-manager",
    version=version,
    description="Daemon Manager - Live status dashboard for systemd services",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "PyYAML>=6.0",
        "psutil>=5.9",
        "rich>=13.0",
        "fastapi>=0.110",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "daemon-manager=daemon_manager.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Monitoring",
        "Framework :: FastAPI",
    ],
    python_requires=">=3.10",
)
