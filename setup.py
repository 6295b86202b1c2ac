# setup.py
from setuptools import setup, find_packages

setup(
    name="slither-lisp",
    version="0.1.1",
    description="Slither: a small Lisp with Q-expressions and curried closures",
    packages=find_packages(include=["slither", "slither.*"]),
    package_data={"slither": ["prelude/*.slr"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["slither=slither.cli:main"],
    },
    zip_safe=False,
)
