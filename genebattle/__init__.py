"""Gene creature battle simulator: speed-based turn order, gene effectiveness and AI opponents."""
__version__ = "0.1.0"
