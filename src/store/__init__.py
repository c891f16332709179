"""Storage adapter layer.

This package maps hierarchical paths onto a content-addressed object
store and a key-value index, and mirrors writes to backup adapters.
"""
