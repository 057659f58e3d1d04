"""
LinoPrint - relief print layer planning.

Turns a photograph into a posterized preview and a set of black and
white cut guides for carving lino blocks.
"""

__version__ = "0.1.0"
