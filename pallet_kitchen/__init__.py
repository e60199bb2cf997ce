"""Small in-memory runtime modules with storage, origins, events and dispatchable calls."""

__version__ = "0.1.0"