"""nuch: publish and retract Nuxt content files through git."""

__version__ = "0.4.0"
