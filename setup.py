# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="shallot",
    version="0.1.0",
    description="Evaluation core of a small Lisp with shared reference cells and struct methods",
    packages=find_namespace_packages(include=["shallot", "shallot.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["shallot=shallot.__main__:main"],
    },
    zip_safe=False,
)
