"""
Setup configuration for the heightmesh package.

Version 0.1.0 - Rectangle merging mesh optimizer with regular baseline,
STL/OBJ/PLY exporters, merge plots and the heightmesh command line tool.
"""

from setuptools import find_packages, setup

setup(
    name="heightmesh",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.0",
        "matplotlib>=3.3.0",
        "typer>=0.9.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "heightmesh=heightmesh.cli.main:main",
        ],
    },
    description="Turn height grids into reduced triangle meshes by greedy rectangle merging",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
        "Topic :: Multimedia :: Graphics :: 3D Modeling",
    ],
    python_requires=">=3.8",
)
