# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="risp",
    version="0.3.0",
    description="A small tree-walking Lisp interpreter with precise error localization",
    packages=find_namespace_packages(include=["risp", "risp.*"]),
    python_requires=">=3.9",
    extras_require={"test": ["pytest", "hypothesis"]},
    zip_safe=False,
)
