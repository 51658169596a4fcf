"""
Cell marks shared by the rules, the engine and the settings.
"""

PLAYER_X = 1
PLAYER_O = -1
EMPTY = 0

SYMBOLS = {PLAYER_X: 'X', PLAYER_O: 'O', EMPTY: '_'}
