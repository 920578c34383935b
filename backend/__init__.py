"""Backend package for the creature evolution HTTP API.

Exposes a GenerationManager over FastAPI so external renderers and tools can
step the simulation, read its state and move brain models in and out.
"""

__version__ = "0.1.0"
