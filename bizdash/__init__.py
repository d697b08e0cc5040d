"""bizdash - small-business analytics backend.

CSV ingestion and validation, manual sales entry, dashboard export and the
authentication API.
"""

__version__ = "0.1.0"
