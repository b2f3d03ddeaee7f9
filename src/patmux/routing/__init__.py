"""Routing — pattern matching and the mux that uses it.

Patterns compile once, at registration, into small frozen variants; the
mux picks the longest matching pattern for each request.
"""
