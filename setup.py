"""
Setup configuration for the meshmap package.

Version 0.1.0 - Mesh to heightmap rasterization with gap filling,
terrain post-processing, exporters and a command-line interface.
"""

from setuptools import find_packages, setup

setup(
    name="meshheightmap",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["meshmap_cli"],
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.6.0",
        "matplotlib>=3.3.0",
        "pillow>=8.0.0",
        "meshio>=5.0.0",
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
            "meshmap=meshmap_cli:main",
        ],
    },
    description="Convert 3D surface meshes into regular terrain heightmaps",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.8",
)
