"""Face-verified attendance engine.

This package is organized by feature modules (identities, matching,
attendance) with a thin Flask controller layer and service/repository layers.
"""
