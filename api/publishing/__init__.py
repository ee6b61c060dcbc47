"""
Publish state and visibility rules shared by posts and airdrops.
"""
