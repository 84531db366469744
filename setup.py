from setuptools import setup

setup(
    name="digraph",
    version="0.1.0",
    description="Generic directed graph with shortest paths and connectivity checks",
    license="MIT",
    packages=["digraph"],
    python_requires=">=3.7",
    install_requires=["PyYAML>=5.1"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["dg = digraph.cli:main"]},
)
