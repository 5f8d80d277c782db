"""Shared Kernel module.

Identity verification against Google and session token handling. Both are
used by the IAM context and by any future context that needs to know who
is calling, so they live outside IAM and must not import from it.
"""
