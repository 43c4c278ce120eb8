#!/usr/bin/env python3
"""
Setup configuration for Minify Pipeline.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

# Read requirements from requirements.txt
requirements = []
if (this_directory / "requirements.txt").exists():
    requirements = (this_directory / "requirements.txt").read_text().strip().split('\n')
    requirements = [req.strip() for req in requirements if req.strip() and not req.startswith('#')]

setup(
    name="minify-pipeline",
    version="1.0.0",
    author="Project Think",
    author_email="",
    description="Pluggable minification pipeline for JavaScript, CSS, HTML, JSON and images",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['compressors*', 'pipeline*']),
    py_modules=[
        'base_classes',
        'resilience_patterns',
        'pipeline_configs',
        'minify_pipeline',
        'compress',
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Internet :: WWW/HTTP :: Site Management",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "pytest-asyncio",
            "black",
            "flake8",
            "mypy",
        ],
        "test": [
            "pytest>=6.0",
            "pytest-cov",
            "pytest-asyncio",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "minify-pipeline=compress:cli",
        ],
    },
    include_package_data=True,
    package_data={
        "": [
            "*.md",
            "*.txt",
        ],
    },
    keywords=[
        "minify",
        "minification",
        "javascript",
        "css",
        "html",
        "terser",
        "esbuild",
        "benchmark",
    ],
)
