# Shared puzzle fixtures.
from objective import Objective

# c00N pre-placed; three connected pairs of dinosaurs.
PUZZLE_INITIAL = "c00N"
PUZZLE_CONNECTIONS = "001120114042"
PUZZLE = Objective(PUZZLE_INITIAL, PUZZLE_CONNECTIONS)

# Boards reached by hand from PUZZLE, scanning open squares row by row.
PUZZLE_KNOWN_SOLUTIONS = (
    "a30Nb11Ec00Nd22We02Ef10E",
    "a30Nb11Ec00Nd02We22Ef10E",
)

# One tile short of the first known solution; only d fits at (2,2).
ONE_SHORT_OF_D = "c00Nf10Ea30Nb11Ee02E"
# Same board without c; only c00N fits at (0,0).
ONE_SHORT_OF_C = "f10Ea30Nb11Ee02Ed22W"

# Every type already on the board (positions need not be valid).
ALL_TYPES_PLACED = "a00Nb00Nc00Nd00Ne00Nf00N"

DIFFICULTY_CATALOGUE = {
    1: [PUZZLE],
    2: [Objective("", PUZZLE_CONNECTIONS), Objective("f10E", PUZZLE_CONNECTIONS)],
    3: [],
}
