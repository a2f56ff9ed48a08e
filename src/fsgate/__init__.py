"""fsgate - confined filesystem tools for automated agents.

- Every path is resolved against an immutable allow-list of root directories
- Paths that escape every root are rejected before any I/O happens
- Operations are exposed as named tools over a small HTTP transport
"""

__version__ = "0.1.0"
