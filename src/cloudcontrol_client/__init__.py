"""CloudControl client.

Typed, asynchronous Python client for the CloudControl cloud infrastructure
management API.
"""

__version__ = "0.1.0"
