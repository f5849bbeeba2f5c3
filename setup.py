#! /usr/bin/env python

from setuptools import setup

setup(
    name="sstools",
    version="0.1.0",
    description="Convert microscopy volumes between TIF files and VTK files.",
    entry_points={
        "console_scripts": [
            "sstools = sstools:main",
            "sstiff2vtk = sstiff2vtk:main",
        ]
    },
    packages=["conversion"],
    py_modules=["sstools", "sstiff2vtk"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "tifffile",
        "pyvista>=0.43",
        "PyYAML",
    ],
    extras_require={"test": ["pytest"]},
)
