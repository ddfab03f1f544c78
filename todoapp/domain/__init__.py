"""Domain layer for todoapp.

Pure domain code: value objects, the Todo aggregate and its events.
Nothing in this package performs I/O.
"""
