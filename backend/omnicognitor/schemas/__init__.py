"""
OmniCognitor Gateway: Schemas Package
======================================

    - resources.py:  create-request bodies (camelCase in, snake_case rows out)
    - responses.py:  `{success, ...}` response envelopes
"""
