from setuptools import find_packages, setup

setup(
    name="reclaim",
    version="0.1.0",
    description="Measure how much disk space deleting a directory tree would free, hard links included.",
    python_requires=">=3.12",
    packages=find_packages(include=["reclaim", "reclaim.*"]),
    install_requires=[
        "result>=0.17",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": ["reclaim = reclaim.cli.app:cli"],
    },
)
