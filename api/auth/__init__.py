"""
Admin bearer-token authentication.
"""
