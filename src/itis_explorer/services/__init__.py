"""
Shared service utilities.

- http.py - ``requests.Session`` factory (User-Agent, default timeout, retry policy)
"""
