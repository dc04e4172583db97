"""
Sigmar's Garden solver bot.

Reads the board from the screen, finds an order of removals that clears
it, and clicks the solution out.
"""

__version__ = "0.1.0"
