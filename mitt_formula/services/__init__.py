# SPDX-License-Identifier: MIT
"""Application services for the mitt installer.

Services coordinate the formula layer (resolution, fetch, extraction)
with configuration and console output.
"""

from mitt_formula.services.install import InstallService, Resolution

__all__ = [
    "InstallService",
    "Resolution",
]
