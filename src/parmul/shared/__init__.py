# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/__init__.py

"""Design-independent verification infrastructure.

Subpackages:
- dv: pyuvm base classes, the in-order scoreboard engine, config helpers
"""
