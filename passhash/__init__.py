# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""Password hashing service: bcrypt behind two HTTP endpoints."""

__version__ = "1.0.0"
