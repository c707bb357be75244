"""Setup configuration for lifecycle-runner."""

from setuptools import setup, find_packages

setup(
    name="lifecycle-runner",
    version="0.1.0",
    description="Nested test suites with lifecycle hooks and a deterministic runner",
    packages=find_packages(include=["lifecycle_runner", "lifecycle_runner.*"]),
    python_requires=">=3.11",
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lifecycle-runner=lifecycle_runner.cli:main",
        ],
    },
)
