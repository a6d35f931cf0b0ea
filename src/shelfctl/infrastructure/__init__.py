"""Infrastructure layer: the owned record store and record sources.

The catalog owns all mutable state; sources only produce records.
Neither imports from services, commands, or output.
"""
