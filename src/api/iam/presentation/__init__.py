"""IAM presentation layer.

Organizes presentation concerns by use case. The auth package holds the
login and session routes together with their error mapping.
"""
