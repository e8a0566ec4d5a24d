#!/usr/bin/env python3
"""FKS Service Manager - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = [
        line.strip() for line in f if line.strip() and not line.startswith("#")
    ]

setup(
    name="fks-service-manager",
    version="1.0.0",
    description="Multi-server deployment manager for the FKS trading platform",
    author="FKS Team",
    packages=find_packages(include=["fks_manager", "fks_manager.*"]),
    package_data={"fks_manager": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "fks-service-manager=fks_manager.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
