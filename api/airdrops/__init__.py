"""
Airdrop calendar: per-category listings and admin writes.
"""
