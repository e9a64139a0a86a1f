# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""htop-tools - system inspection and crypto utilities"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="htop-tools",
    version="1.0.0",
    author="Ilya Makarov",
    author_email="",
    description="System monitoring and crypto utilities for CLI, chat and AI agents",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: Other/Proprietary License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: System :: Monitoring",
        "Topic :: System :: Systems Administration",
        "Topic :: Utilities",
    ],
    python_requires=">=3.10",
    install_requires=[
        # Core - Required
        "click>=8.1.7",
        "pyyaml>=6.0.1",
        "pydantic>=2.5.2",
        "psutil>=5.9.0",
        "cryptography>=41.0.0",
    ],
    extras_require={
        "mcp": [
            "mcp>=1.0.0,<2",
        ],
        "dev": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
            "pytest-cov>=4.1.0",
            "black>=23.12.1",
            "ruff>=0.1.6",
            "mypy>=1.7.1",
        ],
        "full": [
            "mcp>=1.0.0,<2",
        ],
    },
    entry_points={
        "console_scripts": [
            "htop-tools=htop_tools.cli:cli",
        ],
    },
    zip_safe=False,
    keywords=[
        "monitoring",
        "htop",
        "crypto",
        "cli",
        "mcp",
        "ai",
    ],
)
