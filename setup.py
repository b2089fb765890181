from setuptools import setup, find_packages

setup(
    name="sanitize-fs",
    version="1.0.0",
    description="Recursively rename files and directories to safe, portable names",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "argcomplete",
        "PyYAML",
        "rich",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "sanitize-fs = apps.cli:main"
        ],
    },
)
