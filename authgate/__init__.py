# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""authgate: username/password login that issues signed bearer tokens and
gates request paths by the role carried in the token."""

__version__ = "0.1.0"
