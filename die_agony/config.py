"""
Configuration for the Die Agony solver.
"""

# Board dimensions
BOARD_WIDTH = 6

# Puzzle data, row 0 is the top row of the printed board
BOARD_VALUES = [
    [57, 33, 132, 268, 492, 732],
    [81, 123, 240, 443, 353, 508],
    [186, 42, 195, 704, 452, 228],
    [-7, 2, 357, 452, 317, 395],
    [5, 23, -4, 592, 445, 620],
    [0, 77, 32, 403, 337, 452],
]

# (row, col) of the cell the die starts on and of the cell it must reach
START_POSITION = (BOARD_WIDTH - 1, 0)
END_POSITION = (0, BOARD_WIDTH - 1)

# Search settings
MAX_JOURNEYS = 5_000_000  # Expanded journeys before giving up, None disables
PROGRESS_LOG_INTERVAL = 100_000
