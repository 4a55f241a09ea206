# setup.py
from setuptools import setup, find_packages

setup(
    name="archive_export",
    version="0.1.0",
    description="Export in-memory virtual archives as ZIP containers",
    packages=find_packages(
        include=("archive_export", "archive_export.*"),
    ),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
