"""
Tictac - Tic-tac-toe against a random opponent

A human (rabbit) plays a computer opponent (carrot) that picks a
uniformly random empty cell after a short thinking delay. The package
provides:
- Immutable game state and a pure reducer (turn controller)
- Win/draw detection
- Cancelable, epoch-checked opponent move scheduling
- A REST/WebSocket API for a browser view and a terminal client
"""

__version__ = "0.1.0"
