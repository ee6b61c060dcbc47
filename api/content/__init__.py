"""
Daily posts: latest-post read and admin publish.
"""
