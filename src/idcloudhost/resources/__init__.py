"""Resource clients for the IDCloudHost API.

Each module wraps one family of endpoints. Wrappers take a shared
``restapi.Client``, build a ``RequestConfig`` per operation and decode the
JSON result into the Pydantic models from ``restapi.types``.
"""
