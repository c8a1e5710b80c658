# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/tools/__init__.py

"""Command-line tools: dv (build and run one bench) and dv-regress."""
