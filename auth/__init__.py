"""auth/ -- Token signing, encoding and decoding for compact-jwt.

Layer rule: auth/ imports from core/ and the standard library only.
core/ never imports from auth/. main.py imports from both.
"""
