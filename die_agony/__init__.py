"""
die_agony - Die Agony puzzle solver package

Core components:
- Board: The fixed 6x6 numbered board
- Die: A six-sided die whose face values may still be unknown
- Solver: Breadth-first search over journeys, returns Found or NotFound
"""

from .board import Board, Cell, Direction, Position
from .dice import Die
from .solver import Found, Journey, NotFound, Solver, Turn
from .viz import render_board, display_board
