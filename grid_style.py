# Kadastr Grid Style Definitions

# Region fills, indexed by region id
REGION_COLORS = [
    (233, 196, 106),  # sand
    (244, 162, 97),   # apricot
    (231, 111, 81),   # terracotta
    (138, 177, 125),  # sage
    (42, 157, 143),   # teal
    (131, 197, 190),  # mint
    (168, 218, 220),  # sky
    (188, 163, 214),  # lilac
]

# Lines and Outlines
COLOR_GRID_LINES = (70, 70, 70)
COLOR_REGION_BORDER = (27, 27, 46)
COLOR_HIGHLIGHT = (255, 255, 0)   # Blocker house and its X marks

# Pieces
COLOR_HOUSE = (155, 34, 38)
COLOR_HINT_HOUSE = (27, 73, 101)
COLOR_ROOF = (60, 20, 20)
COLOR_X_MARK = (220, 0, 0)

# Text
COLOR_TEXT = (246, 240, 230)
COLOR_TEXT_DIM = (170, 170, 190)

# Application
COLOR_BG = (26, 26, 46)
