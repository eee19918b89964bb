"""Linux networking and I/O utilities: sockets, pollers, timers, memory maps and wire serialization."""

__version__ = "1.0"