"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces for collaborators the domain talks to
- Ports define what the domain needs, adapters implement how
"""

from herald.domain.ports.logger_port import LoggerPort

__all__ = [
    "LoggerPort",
]
