"""CLI tools for hotzenplotz.

- ``python -m hotzenplotz.cli get NAME``: print a collection as JSON
- ``python -m hotzenplotz.cli evict NAME``: drop a collection from the cache
- ``python -m hotzenplotz.cli status``: reconcile and print cache status
"""
