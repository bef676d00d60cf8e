"""Routing — route descriptors, pattern ranking, and priority resolution.

Descriptors are collected from a build manifest, then ordered so that the
first matching rule for any request path is the one that should serve it.
"""
