# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task manager backend: accounts, task lists and the token/session auth layer."""

__version__ = "1.0.0"
