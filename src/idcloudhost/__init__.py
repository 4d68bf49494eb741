"""IDCloudHost API client.

Python SDK for the IDCloudHost REST API covering virtual machines, block
storage and billing accounts.
"""

__version__ = "0.1.0"
