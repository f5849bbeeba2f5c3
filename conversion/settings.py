#!/usr/bin/env python
# coding: utf-8

"""
Settings of the project.
"""

# Command line defaults
DEFAULT_PREFIX = "im"
DEFAULT_OUT_FILE = "ImageData_Original.vtk"

# File extensions
TIF_EXTENSION = ".tif"
VTK_EXTENSION = ".vtk"

# Minimal widths of the slice index in file names.
# Reading and writing do not use the same width.
READ_INDEX_WIDTH = 2
WRITE_INDEX_WIDTH = 4

# Most file systems limit a file name (not the full path) to 255 bytes
MAX_FILENAME_LENGTH = 255

# Name of the point data array holding the voxels in VTK files
VTK_SCALARS_NAME = "scalars"

# Header of the written VTK files; version 5.1 is unknown to VTK < 9
VTK_FILE_VERSION = "3.0"
VTK_TITLE = "vtk output"

# Geometry used when the source format has none
DEFAULT_SPACING = (1.0, 1.0, 1.0)
DEFAULT_ORIGIN = (0.0, 0.0, 0.0)
