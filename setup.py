# setup.py
"""Setup script for the Lona converter."""

from setuptools import setup, find_packages

setup(
    name="lona-converter",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "plugins": [
            "*/manifest.yaml",
            "*/templates/*.j2",
            "*/static/*.swift",
        ],
    },
    install_requires=[
        "click>=8.0",
        "jinja2>=3.0",
        "pyyaml>=6.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "lona=cli.main:cli",
        ],
    },
    python_requires=">=3.9",
)
