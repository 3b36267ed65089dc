"""core/ -- Kernel of compact-jwt: Base64Url, Unix time, claims, errors, config.

Layer rule: core/ has no reverse dependencies. Nothing here imports from
auth/ or main.py.
"""
